import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError

from filedesk.db.errors import DatabaseErrorKind, classify_database_error, translate_database_error


@pytest.mark.parametrize(
    "error, kind, code",
    [
        (IntegrityError("INSERT", {}, Exception("UNIQUE")), DatabaseErrorKind.DUPLICATE, "DUPLICATE_ENTRY"),
        (OperationalError("SELECT 1", {}, Exception("refused")), DatabaseErrorKind.UNAVAILABLE, "DATABASE_UNAVAILABLE"),
        (
            DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True),
            DatabaseErrorKind.UNAVAILABLE,
            "DATABASE_UNAVAILABLE",
        ),
        (SQLAlchemyError("boom"), DatabaseErrorKind.OTHER, "DATABASE_ERROR"),
    ],
)
def test_database_errors_are_translated(error, kind, code):
    assert classify_database_error(error) is kind

    translated = translate_database_error(error)
    assert translated.code == code
    assert translated.cause is error
    assert translated.to_dict()["cause"] == repr(error)
