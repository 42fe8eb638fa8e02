from .person_record import PersonRecord
from .api_responses import PeopleResponse, PersonResponse
from .sort_options import SortDirection, SortField

__all__ = [
    "PersonRecord",
    "PeopleResponse",
    "PersonResponse",
    "SortDirection",
    "SortField",
]
