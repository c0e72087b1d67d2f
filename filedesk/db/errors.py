from enum import Enum

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from filedesk.core.exceptions import (
    BaseBusinessException,
    DatabaseOperationException,
    DatabaseUnavailableException,
    DuplicateEntryException,
)


class DatabaseErrorKind(str, Enum):
    DUPLICATE = "duplicate"
    UNAVAILABLE = "unavailable"
    OTHER = "other"


def classify_database_error(err: SQLAlchemyError) -> DatabaseErrorKind:
    """把 SQLAlchemy 的异常层级归类成有限的几种情况。"""
    if isinstance(err, IntegrityError):
        return DatabaseErrorKind.DUPLICATE
    if isinstance(err, (OperationalError, DisconnectionError, PoolTimeoutError)):
        return DatabaseErrorKind.UNAVAILABLE
    if isinstance(err, DBAPIError) and err.connection_invalidated:
        return DatabaseErrorKind.UNAVAILABLE
    return DatabaseErrorKind.OTHER


_ERROR_MAP = {
    DatabaseErrorKind.DUPLICATE: DuplicateEntryException,
    DatabaseErrorKind.UNAVAILABLE: DatabaseUnavailableException,
    DatabaseErrorKind.OTHER: DatabaseOperationException,
}


def translate_database_error(err: SQLAlchemyError) -> BaseBusinessException:
    """将数据库异常翻译成对外的业务异常，原始异常作为 cause 保留。"""
    return _ERROR_MAP[classify_database_error(err)](cause=err)
