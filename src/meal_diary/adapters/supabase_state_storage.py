"""Supabase storage for the state blob."""

import json
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_diary.services.state import StateStorage


@dataclass
class SupabaseStateStorage(StateStorage):
    """Stores state blobs in the app_state table keyed by name."""

    client: Client
    table_name: str = "app_state"

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key."""
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        if value is None:
            return None
        if isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)

    def save(self, key: str, blob: str) -> None:
        """Upsert the blob for a key."""
        self.client.table(self.table_name).upsert(
            {
                "key": key,
                "value": json.loads(blob),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
