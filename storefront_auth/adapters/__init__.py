"""
Adapters - Implementations of ports.

Password hashing:
- ScryptPasswordHasher: scrypt salted hashes

Principal storage:
- MemoryPrincipalStore: In-memory principal store (testing)

Sessions:
- RedisSessionAdapter: Redis-backed sessions
- MemorySessionAdapter: In-memory sessions (testing)
- DynamoDBSessionAdapter: AWS DynamoDB sessions
"""

# Password hashing
from storefront_auth.adapters.scrypt_hasher import ScryptPasswordHasher

# Principal storage
from storefront_auth.adapters.memory_principal_store import MemoryPrincipalStore

# Sessions
from storefront_auth.adapters.redis_session import RedisSessionAdapter
from storefront_auth.adapters.memory_session import MemorySessionAdapter
from storefront_auth.adapters.dynamodb_session import DynamoDBSessionAdapter

__all__ = [
    # Password hashing
    "ScryptPasswordHasher",
    # Principal storage
    "MemoryPrincipalStore",
    # Sessions
    "RedisSessionAdapter",
    "MemorySessionAdapter",
    "DynamoDBSessionAdapter",
]
