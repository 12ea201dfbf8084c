"""
Alias allocation for generated SQL.

AliasAllocator hands out one short, unique alias per table for the duration
of a generation pass. OutputNameRegistry keeps SELECT-list output names
unique within a statement.

Both compare names case-insensitively since the target dialect does.
"""

import logging
import re

from sqlcanvas.typing import Table

from .config import AliasStyle
from .exceptions import AliasAllocationError

logger = logging.getLogger(__name__)

# Word boundaries for the initials style
WORD_SEPARATORS = re.compile(r"[\s_\-]+")

# Characters dropped from synthesized aliases
INVALID_ALIAS_CHARS = re.compile(r"[^0-9a-zA-Z_]")


class AliasAllocator:
    """
    Assigns unique, deterministic table aliases within one generation pass.

    Resolution order for a table:
    1. The user-declared alias, if it differs from the table name and is free
    2. A synthesized alias: the first characters of the name (prefix style)
       or the initials of up to three words (words style)
    3. The synthesized alias with an increasing integer suffix

    Usage:
        allocator = AliasAllocator()
        allocator.alias_for(orders)  # -> 'ord'
        allocator.alias_for(orders)  # -> 'ord' (cached by table id)
        allocator.reset()            # start a new pass
    """

    def __init__(self, style: AliasStyle = AliasStyle.PREFIX, prefix_length: int = 3):
        self.style = style
        self.prefix_length = prefix_length
        self._used_aliases: set[str] = set()
        self._by_table_id: dict[str, str] = {}

    def reset(self) -> None:
        """Forget every allocation. Called at the start of each generation pass."""
        self._used_aliases.clear()
        self._by_table_id.clear()

    def alias_for(self, table: Table) -> str:
        """
        Return the alias for a table, allocating one on first use.

        Args:
            table: The table to alias

        Returns:
            Unquoted alias, unique within the current pass
        """
        cached = self._by_table_id.get(table.id)
        if cached is not None:
            return cached

        alias = self._declared_alias(table)
        if alias is None:
            alias = self._unique(self.synthesize(table.name))

        self._by_table_id[table.id] = alias
        self._used_aliases.add(alias.lower())
        logger.debug(f"Allocated alias '{alias}' for table '{table.name}' ({table.id})")
        return alias

    def get_alias(self, table_id: str) -> str | None:
        """Get the alias already allocated for a table id, or None."""
        return self._by_table_id.get(table_id)

    def is_used(self, alias: str) -> bool:
        return alias.lower() in self._used_aliases

    def synthesize(self, table_name: str) -> str:
        """Build the candidate alias for a table name, before de-duplication."""
        if self.style is AliasStyle.WORDS:
            words = [w for w in WORD_SEPARATORS.split(table_name) if w]
            candidate = "".join(word[0] for word in words[:3])
        else:
            candidate = INVALID_ALIAS_CHARS.sub("", table_name)[: self.prefix_length]

        candidate = INVALID_ALIAS_CHARS.sub("", candidate).lower()
        if not candidate or candidate[0].isdigit():
            candidate = "t" + candidate
        return candidate

    def _declared_alias(self, table: Table) -> str | None:
        alias = (table.alias or "").strip()
        if not alias or alias == table.name:
            return None
        if self.is_used(alias):
            logger.debug(
                f"Declared alias '{alias}' for table '{table.name}' is taken, synthesizing one"
            )
            return None
        return alias

    def _unique(self, base: str) -> str:
        if not self.is_used(base):
            return base
        # The bound only trips if something has gone badly wrong
        for counter in range(1, len(self._used_aliases) + 2):
            candidate = f"{base}{counter}"
            if not self.is_used(candidate):
                return candidate
        raise AliasAllocationError(f"Could not allocate a unique alias from '{base}'")

    def all_mappings(self) -> dict[str, str]:
        """Return all table id -> alias mappings."""
        return dict(self._by_table_id)

    def __len__(self) -> int:
        return len(self._by_table_id)


class OutputNameRegistry:
    """
    Keeps output column names unique within one statement.

    A name is used as-is when free; otherwise ``<prefix>_<name>`` is tried,
    then ``<name>_1``, ``<name>_2`` and so on.
    """

    def __init__(self):
        self._used: set[str] = set()

    def register(self, name: str, prefix: str | None = None) -> str:
        """
        Claim an output name and return the name actually granted.

        Args:
            name: The natural output name
            prefix: Qualifier tried first on collision (usually the table alias)
        """
        if not self.is_used(name):
            return self._claim(name)

        if prefix:
            prefixed = f"{prefix}_{name}"
            if not self.is_used(prefixed):
                return self._claim(prefixed)

        counter = 1
        while self.is_used(f"{name}_{counter}"):
            counter += 1
        return self._claim(f"{name}_{counter}")

    def is_used(self, name: str) -> bool:
        return name.lower() in self._used

    def _claim(self, name: str) -> str:
        self._used.add(name.lower())
        return name

    def __len__(self) -> int:
        return len(self._used)
