from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Coach(Protocol):
    def get_daily_workout(self) -> str:
        ...


class CricketCoach:
    def __init__(self) -> None:
        logger.debug("In constructor: %s", type(self).__name__)

    def get_daily_workout(self) -> str:
        return "Practice fast bowling for 15 minutes!!!!"


class TrackCoach:
    def __init__(self) -> None:
        logger.debug("In constructor: %s", type(self).__name__)

    def get_daily_workout(self) -> str:
        return "Run a hard 5k!"


class BaseballCoach:
    def __init__(self) -> None:
        logger.debug("In constructor: %s", type(self).__name__)

    def get_daily_workout(self) -> str:
        return "Spend 30 minutes in batting practice"


class TennisCoach:
    def __init__(self) -> None:
        logger.debug("In constructor: %s", type(self).__name__)

    def get_daily_workout(self) -> str:
        return "Practice your backhand volley"


# qualifier -> factory
COACHES: dict[str, Callable[[], Coach]] = {
    "cricketCoach": CricketCoach,
    "trackCoach": TrackCoach,
    "baseballCoach": BaseballCoach,
    "tennisCoach": TennisCoach,
}


def resolve_coaches(*qualifiers: str) -> list[Coach]:
    """
    Build one coach per qualifier.

    Repeated qualifiers resolve to the same instance, so callers asking for
    "cricketCoach" twice get a shared object back.
    """
    built: dict[str, Coach] = {}
    result: list[Coach] = []
    for name in qualifiers:
        try:
            factory = COACHES[name]
        except KeyError:
            raise ValueError(f"Unknown coach qualifier: {name!r}") from None
        if name not in built:
            built[name] = factory()
        result.append(built[name])
    return result
