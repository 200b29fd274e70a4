from .connection import IConnection, IPreparedStatement, IRow
from .exclusive_control import IExclusiveControlManager
from .messages import IMessageResolver
from .unit_of_work import UnitOfWork

__all__ = [
    "IConnection",
    "IExclusiveControlManager",
    "IMessageResolver",
    "IPreparedStatement",
    "IRow",
    "UnitOfWork",
]
