"""Database boundary used by the repositories.

Repositories only ever talk to an object satisfying ``DatabaseConnection``;
the asyncpg-backed ``DatabaseManager`` is one implementation and test doubles
are another.
"""

from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    runtime_checkable,
)

T = TypeVar("T")

Row = Dict[str, Any]


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a statement that returns no rows."""

    affected_rows: int
    status: str = ""

    @classmethod
    def from_status(cls, status: Optional[str]) -> "ExecuteResult":
        """Parse a PostgreSQL command tag such as ``UPDATE 3`` or ``INSERT 0 1``."""
        if not status:
            return cls(affected_rows=0, status="")
        last = status.split()[-1]
        return cls(affected_rows=int(last) if last.isdigit() else 0, status=status)


@runtime_checkable
class DatabaseConnection(Protocol):
    """Parameterized query executor using ``$n`` placeholders."""

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        """Run a statement and return every row as a dict."""
        ...

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        """Run a statement and return the first row, or None."""
        ...

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> ExecuteResult:
        """Run a statement and report how many rows it affected."""
        ...

    async def transaction(
        self, fn: Callable[["DatabaseConnection"], Awaitable[T]]
    ) -> T:
        """Run ``fn`` with a connection bound to a single transaction.

        The transaction commits when ``fn`` returns and rolls back if it raises.
        """
        ...
