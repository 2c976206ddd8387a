"""
Medical history persistence on a keyed document store.

Two logical tables are used: medical_history (one MedicalHistory document
per user id) and users (exposes the patient's display name). Saves always
replace the whole document.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol

from pydantic import ValidationError

from .errors import DataFormatError, DisplayNameNotFoundError, HistoryNotFoundError, StoreError
from .models import MedicalHistory, PersonalInformation, PregnancyHistory

logger = logging.getLogger(__name__)

DISPLAY_NAME_FIELD = "fullName"


def current_millis() -> int:
    return int(time.time() * 1000)


class DocumentStore(Protocol):
    def get(self, table: str, key: str) -> Optional[Dict[str, Any]]: ...
    def set(self, table: str, key: str, document: Dict[str, Any]) -> None: ...


class SupabaseDocumentStore:
    """
    DocumentStore backed by Supabase tables.

    Each table holds one row per key in `key_column`; the document's fields
    are the remaining columns.
    """

    def __init__(self, client: Any, key_column: str = "id"):
        self.client = client
        self.key_column = key_column

    def get(self, table: str, key: str) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table(table)
            .select("*")
            .eq(self.key_column, key)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        document = dict(rows[0])
        document.pop(self.key_column, None)
        return document

    def set(self, table: str, key: str, document: Dict[str, Any]) -> None:
        row = {self.key_column: key, **document}
        self.client.table(table).upsert(row, on_conflict=self.key_column).execute()


class HistoryStore:
    def __init__(
        self,
        store: DocumentStore,
        medical_history_table: str = "medical_history",
        users_table: str = "users",
        clock: Callable[[], int] = current_millis
    ):
        self.store = store
        self.medical_history_table = medical_history_table
        self.users_table = users_table
        self.clock = clock

    def fetch_history(self, user_id: str) -> MedicalHistory:
        try:
            document = self.store.get(self.medical_history_table, user_id)
        except Exception as e:
            logger.error(f"Exception in fetch_history for {user_id}: {e}")
            raise StoreError(f"Failed to read medical history for user {user_id}: {e}") from e

        if document is None:
            raise HistoryNotFoundError(user_id)

        try:
            return MedicalHistory.model_validate(document)
        except ValidationError as e:
            logger.error(f"Medical history data format error for {user_id}: {e}")
            raise DataFormatError(f"Medical history data format error for user {user_id}") from e

    def fetch_display_name(self, user_id: str) -> str:
        try:
            document = self.store.get(self.users_table, user_id)
        except Exception as e:
            logger.error(f"Exception in fetch_display_name for {user_id}: {e}")
            raise StoreError(f"Failed to read user {user_id}: {e}") from e

        name = (document or {}).get(DISPLAY_NAME_FIELD)
        if not isinstance(name, str):
            raise DisplayNameNotFoundError(user_id)
        return name

    def save_history(
        self,
        user_id: str,
        personal_info: PersonalInformation,
        pregnancy_history: PregnancyHistory,
        risk_label: Optional[str] = None
    ) -> str:
        # createdAt is re-stamped on every save; earlier values are not kept.
        now = self.clock()
        record = MedicalHistory(
            user_id=user_id,
            personal_information=personal_info,
            pregnancy_history=pregnancy_history,
            created_at=now,
            updated_at=now,
            ml_risk_level=risk_label,
        )

        try:
            self.store.set(self.medical_history_table, user_id, record.model_dump(by_alias=True))
        except Exception as e:
            logger.error(f"Exception in save_history for {user_id}: {e}")
            raise StoreError(f"Failed to save medical history for user {user_id}: {e}") from e

        logger.info(f"Medical history saved for user {user_id} (risk label: {risk_label})")
        return f"Complete data with ML analysis saved successfully for user: {user_id}"
