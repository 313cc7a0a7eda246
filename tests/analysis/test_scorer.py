"""Tests for per-function scoring."""

from cyclogate.analysis import BASE_COMPLEXITY, score, score_function
from cyclogate.syntax import FunctionDeclaration, NodeKind, function, node


class TestScore:
    """Test score()."""

    def test_base_path(self, empty_body):
        assert score(empty_body) == BASE_COMPLEXITY == 1

    def test_scenario_foo(self, foo_body):
        """if + while + ternary -> 4."""
        assert score(foo_body) == 4

    def test_k_flat_decisions(self):
        kinds = [NodeKind.IF, NodeKind.SWITCH, NodeKind.FOR, NodeKind.WHILE, NodeKind.DO, NodeKind.CONDITIONAL]
        for k in range(len(kinds) + 1):
            body = node(NodeKind.COMPOUND, *(node(kind) for kind in kinds[:k]))
            assert score(body) == 1 + k

    def test_missing_body_scores_base(self):
        """A null subtree is not an error for the scorer itself."""
        assert score(None) == 1


class TestScoreFunction:
    """Test score_function()."""

    def test_prototype_not_scored(self):
        assert score_function(FunctionDeclaration(name="proto")) is None

    def test_definition_scored(self, foo_body):
        assert score_function(function("foo", foo_body)) == 4

    def test_empty_definition(self, empty_body):
        assert score_function(function("bar", empty_body)) == 1

    def test_only_body_is_scored(self, empty_body):
        """Decisions outside the body (e.g. default arguments) are ignored."""
        default_arg = node(NodeKind.CONDITIONAL)
        decl = function("f", empty_body, extra_children=[default_arg])
        assert score_function(decl) == 1
