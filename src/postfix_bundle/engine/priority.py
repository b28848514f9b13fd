"""
Priority chain and lookup order resolution.

The effective chain is the optional default postfix, then the user
priorities, then the empty default postfix, with repeated entries
dropped (first occurrence wins):

    default_postfix="en", priorities=["cs", "en"]  ->  ("en", "cs", "")

A lookup searches the effective chain; an explicit postfix that is not part
of the chain is searched first, ahead of the whole chain.
"""

from __future__ import annotations

import collections.abc as _abc

import postfix_bundle.constants as constants


def build_effective_chain(
    priorities: _abc.Iterable[str],
    default_postfix: str | None = None,
) -> tuple[str, ...]:
    """
    Build the effective chain for a set of priorities.

    Args:
        priorities: User priorities, highest first.
        default_postfix: Postfix read when no explicit one is given.

    Returns:
        De-duplicated chain, never empty, always ending with ``""``.
    """
    head = [default_postfix] if default_postfix is not None else []
    chain: list[str] = []
    for postfix in (*head, *priorities):
        if postfix == constants.DEFAULT_POSTFIX or postfix in chain:
            continue
        chain.append(postfix)
    chain.append(constants.DEFAULT_POSTFIX)
    return tuple(chain)


def resolve_chain(
    requested: str | None,
    effective: _abc.Sequence[str],
) -> tuple[str, ...]:
    """
    Compute the postfixes to search for one lookup.

    Args:
        requested: Explicit postfix, or None to use the configured chain.
        effective: The effective chain.

    Returns:
        ``effective`` when nothing was requested or the request is already
        part of it, otherwise ``(requested, *effective)``.

    Example:
        >>> resolve_chain("de", ("cs", ""))
        ('de', 'cs', '')
        >>> resolve_chain("cs", ("cs", ""))
        ('cs', '')
    """
    if requested is None or requested in effective:
        return tuple(effective)
    return (requested, *effective)


def explicit_postfix(
    requested: str | None,
    effective: _abc.Sequence[str],
) -> str | None:
    """Return the requested postfix if it changes the lookup order, else None."""
    if requested is None or requested in effective:
        return None
    return requested


class PriorityChain:
    """
    Mutable priority configuration for one bundle.

    Not thread-safe on its own; the owning Bundle serializes access.
    """

    __slots__ = ("_priorities", "_default_postfix", "_effective")

    def __init__(
        self,
        priorities: _abc.Iterable[str] = (),
        default_postfix: str | None = None,
    ) -> None:
        self._priorities: tuple[str, ...] = tuple(priorities)
        self._default_postfix = default_postfix
        self._effective = build_effective_chain(self._priorities, default_postfix)

    @property
    def priorities(self) -> tuple[str, ...]:
        """User priorities as configured, highest first."""
        return self._priorities

    @property
    def default_postfix(self) -> str | None:
        return self._default_postfix

    @property
    def effective(self) -> tuple[str, ...]:
        """The effective chain (immutable snapshot)."""
        return self._effective

    @property
    def head(self) -> str:
        """Postfix targeted by reads without an explicit postfix."""
        return self._effective[0]

    def set_priorities(self, priorities: _abc.Iterable[str]) -> None:
        self._priorities = tuple(priorities)
        self._rebuild()

    def set_default_postfix(self, postfix: str | None) -> None:
        self._default_postfix = postfix
        self._rebuild()

    def lookup_order(self, requested: str | None) -> tuple[str, ...]:
        """Postfixes to search for one lookup (see resolve_chain)."""
        return resolve_chain(requested, self._effective)

    def _rebuild(self) -> None:
        self._effective = build_effective_chain(self._priorities, self._default_postfix)

    def __repr__(self) -> str:
        return f"PriorityChain({list(self._effective)!r})"
