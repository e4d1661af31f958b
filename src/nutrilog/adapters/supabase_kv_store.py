"""Supabase-backed key-value store for session snapshots."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrilog.services.session import SessionStore


@dataclass
class SupabaseKeyValueStore(SessionStore):
    """Stores JSON snapshots in a ``key``/``value`` table."""

    client: Client
    table: str = "kv_store"

    def load(self, key: str) -> object | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def save(self, key: str, value: object) -> None:
        """Insert or replace the value for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
