from typing import TypeVar, Generic, Optional, List, Type, Sequence
from supabase import AsyncClient
from catalog_crawler.db.models import BaseModel

T = TypeVar('T', bound=BaseModel)

class BaseRepository(Generic[T]):
    """Base repository with CRUD operations"""

    def __init__(self, supabase: AsyncClient, table_name: str, model_class: Type[T]):
        self.supabase = supabase
        self.table_name = table_name
        self.model_class = model_class

    async def create(self, model: T) -> T:
        """Create a new record"""
        data = model.to_dict()
        result = await self.supabase.table(self.table_name).insert(data).execute()
        return self.model_class.from_dict(result.data[0])

    async def get_by_id(self, id: int) -> Optional[T]:
        """Get record by ID"""
        result = await self.supabase.table(self.table_name).select("*").eq("id", id).execute()
        return self.model_class.from_dict(result.data[0]) if result.data else None

    async def update_fields(self, id: int, fields: dict) -> T:
        """Update the given columns only. ``None`` values are written as NULL."""
        result = await self.supabase.table(self.table_name).update(fields).eq("id", id).execute()
        if not result.data:
            raise ValueError(f"No row with id {id} in {self.table_name}")
        return self.model_class.from_dict(result.data[0])

    async def find_by(self, **filters) -> List[T]:
        """Find records by filters"""
        query = self.supabase.table(self.table_name).select("*")
        for field, value in filters.items():
            query = query.is_(field, "null") if value is None else query.eq(field, value)
        result = await query.execute()
        return [self.model_class.from_dict(item) for item in result.data]

    async def find_one(self, **filters) -> Optional[T]:
        """Find the first record matching filters"""
        found = await self.find_by(**filters)
        return found[0] if found else None

    async def get_or_create(self, model: T, keys: Sequence[str]) -> T:
        """Return the row matching ``keys`` on ``model``, inserting ``model`` if absent.

        The insert is an upsert that ignores conflicts on the table's unique
        constraint over ``keys``, so a concurrent insert of the same key
        resolves to the row that won.
        """
        filters = {key: getattr(model, key) for key in keys}
        existing = await self.find_one(**filters)
        if existing:
            return existing

        await self.supabase.table(self.table_name)\
            .upsert(model.to_dict(), on_conflict=",".join(keys), ignore_duplicates=True)\
            .execute()
        created = await self.find_one(**filters)
        if not created:
            raise ValueError(f"Row {filters} missing from {self.table_name} after upsert")
        return created
