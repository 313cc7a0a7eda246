"""Send one remark per scored function to a notice channel."""

from __future__ import annotations

import logging
from typing import Optional

from ..syntax import SourceLocation
from .notices import NoticeChannel, complexity_notice

logger = logging.getLogger(__name__)


class ReportEmitter:
    """Fire-and-forget delivery of complexity remarks.

    Notices are sent synchronously, in the order the traversal scores
    functions. A failing channel is logged and otherwise ignored; its own
    failure policy is responsible for anything more.
    """

    def __init__(self, channel: NoticeChannel) -> None:
        self.channel = channel
        self.sent = 0
        self.failed = 0

    def emit(self, location: Optional[SourceLocation], score: int) -> bool:
        try:
            self.channel.report(complexity_notice(location, score))
        except Exception:
            self.failed += 1
            logger.warning("Notice channel rejected remark for %s", location, exc_info=True)
            return False
        self.sent += 1
        return True
