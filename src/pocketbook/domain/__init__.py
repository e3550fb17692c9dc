"""Domain layer for pocketbook application."""

import importlib

# The services import pocketbook.database.base, which itself imports
# pocketbook.domain.context, so they are resolved on first access.
_SERVICES = {
    "AuthService": "auth",
    "BankAccountService": "bank_account",
    "BulkUploadOptions": "bulk_upload",
    "BulkUploadService": "bulk_upload",
    "CategoryService": "category",
    "DataResetService": "data_reset",
    "RequestContext": "context",
    "TagService": "tag",
    "TotalsService": "totals",
    "TransactionService": "transaction",
}

__all__ = sorted(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        module = importlib.import_module(f"pocketbook.domain.{_SERVICES[name]}")
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
