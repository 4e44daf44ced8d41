from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional

@dataclass(kw_only=True)
class BaseModel:
    """Base model with the columns every catalog table carries"""
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert model to a row dictionary, leaving out unset columns"""
        return {
            key: self._format_datetime(value) if isinstance(value, datetime) else value
            for key, value in self.__dict__.items()
            if value is not None
        }

    def _format_datetime(self, dt: datetime) -> str:
        """Format datetime to ISO format"""
        return dt.isoformat()

    @staticmethod
    def _parse_datetime(value: Any) -> Any:
        """Parse timestamps returned by PostgREST, keeping the raw value if unknown"""
        if not isinstance(value, str):
            return value
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            try:
                return datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
            except ValueError:
                return value

    @classmethod
    def from_dict(cls, data: dict) -> 'BaseModel':
        """Create model instance from a row dictionary"""
        known = {f.name for f in fields(cls)}
        row = {key: value for key, value in data.items() if key in known}
        for key in ('created_at', 'updated_at'):
            if key in row:
                row[key] = cls._parse_datetime(row[key])
        return cls(**row)
