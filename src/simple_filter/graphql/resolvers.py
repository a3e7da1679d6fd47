"""
Query callback running generated GraphQL queries against SQLAlchemy models.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..filtering import FilterBuilder
from ..logging import get_logger

logger = get_logger(__name__)


class SQLAlchemyQueryCallback:
    """
    Resolve model queries with an async SQLAlchemy session.

    Usage:
        callback = SQLAlchemyQueryCallback(async_sessionmaker(engine))
        callback.register("user", FilterBuilder(Users))
        schema = builder.build(callback)
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.builders: dict[str, FilterBuilder] = {}
        self.select_factories: dict[str, Callable[[], Select]] = {}

    def register(
        self,
        base_name: str,
        filter_builder: FilterBuilder,
        select_factory: Callable[[], Select] | None = None,
    ) -> None:
        """Register the filter builder and base query of a model."""
        self.builders[base_name] = filter_builder
        self.select_factories[base_name] = select_factory or (lambda: select(filter_builder.model))

    def _rows_to_dicts(self, builder: FilterBuilder, result) -> list[dict[str, Any]]:
        names = [field.name for field in builder.fields]
        if builder.mapped:
            return [{name: getattr(obj, name) for name in names} for obj in result.scalars().all()]
        return [{name: row.get(name) for name in names} for row in result.mappings().all()]

    async def __call__(
        self,
        base_name: str,
        filters: dict[str, Any] | None,
        limit: int,
        offset: int,
    ) -> tuple[list[dict[str, Any]], int]:
        try:
            builder = self.builders[base_name]
        except KeyError:
            raise LookupError(f"no filter builder registered for {base_name!r}") from None

        stmt = builder.asf_filter(self.select_factories[base_name](), filters)
        count_stmt = select(func.count()).select_from(stmt.subquery())

        async with self.session_factory() as session:
            total = (await session.execute(count_stmt)).scalar_one()

            result = await session.execute(stmt.limit(limit).offset(offset))
            rows = self._rows_to_dicts(builder, result)

        logger.debug(
            "Resolved model query",
            base_name=base_name,
            total=total,
            returned=len(rows),
        )
        return rows, total
