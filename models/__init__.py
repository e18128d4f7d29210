from models.classification import (
    Classification,
    ClassificationInput,
    FailedInput,
    FeedInput,
    FeedItem,
    PageInput,
)
from models.company import (
    CheckMethod,
    Company,
    CompanyHistory,
    CompanyStatus,
    Incident,
    new_company,
)
from models.errors import (
    CompanyNotFoundError,
    FetchError,
    FetchErrorKind,
    ValidationError,
)
from models.event import RefreshOutcome

__all__ = [
    "CheckMethod",
    "Classification",
    "ClassificationInput",
    "Company",
    "CompanyHistory",
    "CompanyNotFoundError",
    "CompanyStatus",
    "FailedInput",
    "FetchError",
    "FetchErrorKind",
    "FeedInput",
    "FeedItem",
    "Incident",
    "PageInput",
    "RefreshOutcome",
    "ValidationError",
    "new_company",
]
