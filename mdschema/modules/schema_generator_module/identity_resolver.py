"""Identity resolution: merge records by name and assign generated identifiers.

Records with the same identity key are the same logical entity. The key is
the normalized name, except for records at or above ``unique_depth`` (depth
<= unique_depth), whose key is a ``(name, position)`` tuple. Such keys live
outside the name namespace, so those records can never merge and can never
be the target of a ``{name}`` reference.

Properties merge in document order with later values winning, and every
member of an identity ends up with a copy of the same merged property set.
Members are therefore indistinguishable apart from depth, type and children.

Functions:
    resolve_identities(flat, unique_depth, id_factory): Merge and assign ids
    identity_key(record, index, unique_depth): Compute one identity key
    generate_uuid(): Default identifier factory (RFC 4122 version 4)

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import copy
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from mdschema.exceptions import ReferenceException
from mdschema.types import IdFactory
from .records import FlatDocument, Record

from mdschema.utils.logging_utils import get_module_logger
logger = get_module_logger(__name__)

IdentityKey = Union[str, Tuple[str, int]]


def generate_uuid() -> str:
    """Return a random version 4 UUID string."""
    return str(uuid.uuid4())


def identity_key(record: Record, index: int, unique_depth: int = 0) -> IdentityKey:
    """Compute the identity key of the record at arena position ``index``.

    Unique records get a tuple key that no reference name can equal.
    """
    if record.depth <= unique_depth:
        return (record.name, index)
    return record.name


@dataclass
class IdentityMap:
    """Side table produced by the resolver.

    Attributes:
        keys: Identity key for each arena position
        ids: Generated identifier for each identity key
        members: Arena positions sharing each identity key, in document order
    """
    keys: List[IdentityKey] = field(default_factory=list)
    ids: Dict[IdentityKey, str] = field(default_factory=dict)
    members: Dict[IdentityKey, List[int]] = field(default_factory=dict)

    def key_of(self, index: int) -> IdentityKey:
        return self.keys[index]

    def id_of(self, index: int) -> str:
        return self.ids[self.keys[index]]

    def records_for(self, identity: IdentityKey) -> List[int]:
        return self.members.get(identity, [])

    def resolve(self, identity: str, flat: FlatDocument) -> Tuple[Record, str]:
        """Look up the first record and the identifier of a referenced identity.

        Raises:
            ReferenceException: If no record has this identity key
        """
        indices = self.records_for(identity)
        if not indices:
            raise ReferenceException(identity)
        return flat.records[indices[0]], self.ids[identity]


def resolve_identities(
    flat: FlatDocument,
    unique_depth: int = 0,
    id_factory: Optional[IdFactory] = None
) -> IdentityMap:
    """Merge records sharing an identity key and assign identifiers.

    Mutates the ``properties`` of the records in ``flat``.

    Args:
        flat: Flattened document
        unique_depth: Records with depth <= unique_depth are never merged
        id_factory: Callable producing identifiers (defaults to uuid4 strings)

    Returns:
        IdentityMap for the document
    """
    id_factory = id_factory or generate_uuid
    identities = IdentityMap()
    merged: Dict[IdentityKey, Dict[str, str]] = {}

    for index, record in enumerate(flat.records):
        key = identity_key(record, index, unique_depth)
        identities.keys.append(key)

        if key not in identities.ids:
            identities.ids[key] = id_factory()
            identities.members[key] = []
            merged[key] = {}

        identities.members[key].append(index)
        merged[key].update(record.properties)

    for key, indices in identities.members.items():
        for index in indices:
            flat.records[index].properties = copy.deepcopy(merged[key])
        if len(indices) > 1:
            logger.debug(f"Merged {len(indices)} records into identity {key!r}")

    logger.debug(
        f"Resolved {len(flat.records)} records into {len(identities.ids)} identities "
        f"(unique_depth={unique_depth})"
    )
    return identities
