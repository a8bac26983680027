from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ..coaches import Coach

logger = logging.getLogger(__name__)


class DemoController:
    """Constructor-injection demo: both coaches are handed in by the assembly code."""

    def __init__(self, my_coach: Coach, another_coach: Coach) -> None:
        logger.debug("In constructor: %s", type(self).__name__)
        self.my_coach = my_coach
        self.another_coach = another_coach

    def daily_workout(self) -> str:
        return self.my_coach.get_daily_workout()

    def check(self) -> str:
        same = self.my_coach is self.another_coach
        return f"Comparing beans: myCoach == anotherCoach {str(same).lower()}"

    def router(self) -> APIRouter:
        router = APIRouter(tags=["demo"])
        router.add_api_route(
            "/dailyworkout", self.daily_workout, methods=["GET"], response_class=PlainTextResponse
        )
        router.add_api_route(
            "/check", self.check, methods=["GET"], response_class=PlainTextResponse
        )
        return router
