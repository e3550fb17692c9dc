"""Shared pytest fixtures for pocketbook tests."""

import tempfile
import os
from pathlib import Path
import pytest

from pocketbook.database.factories import create_sqlite_database
from pocketbook.domain.auth import AuthService
from pocketbook.domain.bank_account import BankAccountService
from pocketbook.domain.bulk_upload import BulkUploadService
from pocketbook.domain.category import CategoryService
from pocketbook.domain.data_reset import DataResetService
from pocketbook.domain.tag import TagService
from pocketbook.domain.totals import TotalsService
from pocketbook.domain.transaction import TransactionService

PASSWORD = "correct horse battery"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def auth_service(temp_db):
    return AuthService(temp_db)


@pytest.fixture
def user_a(auth_service):
    """Session of a signed-up user."""
    return auth_service.sign_up("alice@example.com", PASSWORD)


@pytest.fixture
def user_b(auth_service):
    """Session of a second, unrelated user."""
    return auth_service.sign_up("bob@example.com", PASSWORD)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def bank_account_service(temp_db):
    """Create a BankAccountService with a temporary database."""
    return BankAccountService(temp_db)


@pytest.fixture
def tag_service(temp_db):
    """Create a TagService with a temporary database."""
    return TagService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def totals_service(temp_db):
    return TotalsService(temp_db)


@pytest.fixture
def bulk_upload_service(temp_db):
    """Create a BulkUploadService with a temporary database."""
    return BulkUploadService(temp_db)


@pytest.fixture
def data_reset_service(temp_db):
    return DataResetService(temp_db)


@pytest.fixture
def reference_data(user_a, category_service, bank_account_service, tag_service):
    """Seed user_a with one category per kind, a bank account and two tags.

    Returns a dict of IDs keyed by name.
    """
    return {
        "Groceries": category_service.create_category(user_a, kind="spend", name="Groceries"),
        "Salary": category_service.create_category(user_a, kind="earn", name="Salary"),
        "Savings": category_service.create_category(user_a, kind="save", name="Savings"),
        "Main Account": bank_account_service.create_bank_account(user_a, name="Main Account"),
        "essentials": tag_service.create_tag(user_a, name="essentials"),
        "monthly": tag_service.create_tag(user_a, name="monthly"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, temp_db):
    """Invoke the CLI against the temporary database.

    The fixture session is closed first so the CLI process can take the
    SQLite write lock.
    """
    from pocketbook.cli.main import cli

    def _run(*args, user=None, input=None):
        temp_db.disconnect()
        base = ["--db-path", temp_db.database_path]
        if user is not None:
            base += ["--user", user.email if hasattr(user, "email") else user]
        return cli_runner.invoke(cli, [*base, *args], input=input, env={"POCKETBOOK_USER": None})

    return _run


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
