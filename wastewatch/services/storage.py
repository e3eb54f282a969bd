"""
Key-value storage providers for report snapshots

Every provider offers plain get/set plus a versioned pair used for
compare-and-set writes. Versions start at 0 for a missing key and grow by
one on every successful write.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wastewatch.exceptions import ConcurrentModificationError
from wastewatch.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Asynchronous, fallible key-value provider"""
    
    @abstractmethod
    async def get_versioned(self, key: str) -> Tuple[Optional[bytes], int]:
        """Return the stored value (or None) and its version"""
    
    @abstractmethod
    async def set(self, key: str, value: bytes) -> int:
        """Overwrite the value unconditionally and return the new version"""
    
    @abstractmethod
    async def compare_and_set(self, key: str, value: bytes, expected_version: int) -> int:
        """Write only if the stored version equals expected_version"""
    
    async def get(self, key: str) -> Optional[bytes]:
        value, _ = await self.get_versioned(key)
        return value


class MemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage, used for tests and ephemeral runs"""
    
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, Tuple[bytes, int]] = {
            key: (value, 1) for key, value in (initial or {}).items()
        }
    
    async def get_versioned(self, key: str) -> Tuple[Optional[bytes], int]:
        if key not in self._data:
            return None, 0
        return self._data[key]
    
    async def set(self, key: str, value: bytes) -> int:
        _, version = self._data.get(key, (b"", 0))
        self._data[key] = (value, version + 1)
        return version + 1
    
    async def compare_and_set(self, key: str, value: bytes, expected_version: int) -> int:
        _, actual = await self.get_versioned(key)
        if actual != expected_version:
            raise ConcurrentModificationError(key, expected_version, actual)
        return await self.set(key, value)


class SqlKeyValueStorage(KeyValueStorage):
    """Storage backed by the kv_store table"""
    
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
    
    async def get_versioned(self, key: str) -> Tuple[Optional[bytes], int]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            )
            entry = result.scalar_one_or_none()
        
        if not entry:
            return None, 0
        return entry.value, entry.version
    
    async def set(self, key: str, value: bytes) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            )
            entry = result.scalar_one_or_none()
            
            if entry:
                version = entry.version + 1
                entry.value = value
                entry.version = version
            else:
                version = 1
                session.add(KeyValueEntry(key=key, value=value, version=version))
            
            await session.commit()
        
        logger.debug("Stored %d bytes under '%s' (v%d)", len(value), key, version)
        return version
    
    async def compare_and_set(self, key: str, value: bytes, expected_version: int) -> int:
        async with self.session_factory() as session:
            if expected_version == 0:
                session.add(KeyValueEntry(key=key, value=value, version=1))
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    _, actual = await self.get_versioned(key)
                    raise ConcurrentModificationError(key, expected_version, actual)
                return 1
            
            result = await session.execute(
                update(KeyValueEntry)
                .where(
                    (KeyValueEntry.key == key) &
                    (KeyValueEntry.version == expected_version)
                )
                .values(value=value, version=expected_version + 1)
            )
            matched = result.rowcount
            await session.commit()
        
        if matched != 1:
            _, actual = await self.get_versioned(key)
            raise ConcurrentModificationError(key, expected_version, actual)
        
        return expected_version + 1
