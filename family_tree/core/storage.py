from family_tree.core.config import settings
from family_tree.services.family_store import FamilyStore


def get_store() -> FamilyStore:
    return FamilyStore(
        data_dir=settings.data_dir,
        store_filename=settings.store_filename,
        backup_prefix=settings.backup_prefix,
    )
