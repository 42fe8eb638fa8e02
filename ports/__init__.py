from .gateway import PeopleGatewayPort
from .repos import PeopleRepoPort
from .scheduler import SchedulerPort, TimerHandle

__all__ = [
    "PeopleGatewayPort",
    "PeopleRepoPort",
    "SchedulerPort",
    "TimerHandle",
]
