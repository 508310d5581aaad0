# minicrm/__init__.py
"""
minicrm - contact manager.

Modules:
- models: Contact record
- validation: name/email checks
- storage: ContactStore contract + volatile / JSON-file backends
- config, logging_config: runtime settings
- cli: click commands and interactive menu
"""

__version__ = "1.0.0"

from minicrm.errors import ContactError, FormatError, NotFoundError, PersistenceError, ValidationError
from minicrm.models import Contact

__all__ = [
    "Contact",
    "ContactError",
    "FormatError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
