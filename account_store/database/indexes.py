"""
Index creation for the accounts collection.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from account_store.models.account import LookupField

DEFAULT_COLLECTION = "users"


async def create_account_indexes(
    db: AsyncIOMotorDatabase,
    collection: str = DEFAULT_COLLECTION,
) -> None:
    """
    Create unique indexes on every account lookup key.

    Duplicate names, emails or tokens are then rejected by the store itself,
    surfacing as a StoreOperationError from the account store.
    """
    accounts = db[collection]
    for field in LookupField:
        # Cleared tokens are stored as null and must not collide.
        await accounts.create_index(
            field.value,
            unique=True,
            partialFilterExpression={field.value: {"$type": "string"}},
        )
