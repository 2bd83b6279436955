"""Domain models used across application layer boundaries."""

from .duration import domain_parse_duration
from .models import UNKNOWN_LAST_UPDATED, Application, Namespace, NamespaceStatus
from .timestamps import domain_parse_timestamp

__all__ = [
	"UNKNOWN_LAST_UPDATED",
	"Application",
	"Namespace",
	"NamespaceStatus",
	"domain_parse_duration",
	"domain_parse_timestamp",
]
