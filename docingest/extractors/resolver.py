"""
Adapter resolution for libraries with an unstable public interface.

A resolver loads a library handle once, walks an ordered chain of probes
against it and keeps the first adapter that matches. Every caller after
that shares the same adapter (or the same "unavailable" outcome) for the
lifetime of the resolver; nothing is retried.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from docingest.extractors.base import LibraryUnavailable

logger = logging.getLogger(__name__)

# Normalized adapter signature: document bytes in, text out.
TextAdapter = Callable[[bytes], str]


@dataclass(frozen=True)
class Probe:
    """
    One shape detector in a probe chain.

    `probe` inspects a library handle and returns an adapter when the
    handle exposes the shape it recognizes, or None otherwise. It must not
    run an extraction while doing so.
    """

    name: str
    probe: Callable[[Any], TextAdapter | None]


class AdapterResolver:
    """
    Lazily resolves a single adapter for a library.

    Resolution happens at most once, guarded by a lock, so concurrent
    first callers converge on the same winner.
    """

    def __init__(
        self,
        loader: Callable[[], Any | None],
        probes: Iterable[Probe],
        library: str,
    ):
        """
        Initialize the resolver.

        Args:
            loader: Returns the library handle, or None if it is not installed.
            probes: Probe chain, tried in the given order.
            library: Human-readable library name for logs and errors.
        """
        self.library = library
        self._loader = loader
        self._probes: tuple[Probe, ...] = tuple(probes)
        self._lock = threading.Lock()
        self._resolved = False
        self._adapter: TextAdapter | None = None
        self._strategy: str | None = None

    @property
    def resolved(self) -> bool:
        """Whether the probe chain has already run."""
        return self._resolved

    @property
    def strategy(self) -> str | None:
        """Name of the winning probe, or None if unresolved or unavailable."""
        return self._strategy

    @property
    def probe_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self._probes)

    def resolve(self) -> TextAdapter | None:
        """
        Return the memoized adapter, running the probe chain on first use.

        Returns:
            The adapter, or None if the library is definitively unavailable.
        """
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    self._adapter, self._strategy = self._run_chain()
                    self._resolved = True
        return self._adapter

    def require(self) -> TextAdapter:
        """
        Return the adapter or fail.

        Raises:
            LibraryUnavailable: If no probe matched.
        """
        adapter = self.resolve()
        if adapter is None:
            raise LibraryUnavailable(self.library)
        return adapter

    def reset(self) -> None:
        """Forget the cached outcome. Intended for tests only."""
        with self._lock:
            self._resolved = False
            self._adapter = None
            self._strategy = None

    def _run_chain(self) -> tuple[TextAdapter | None, str | None]:
        try:
            handle = self._loader()
        except Exception as e:
            logger.warning("Loading %s failed: %r", self.library, e)
            handle = None

        if handle is None:
            logger.warning("%s could not be loaded; its formats are unavailable", self.library)
            return None, None

        for probe in self._probes:
            try:
                adapter = probe.probe(handle)
            except Exception as e:
                logger.debug("Probe '%s' for %s raised %r", probe.name, self.library, e)
                continue

            if adapter is not None:
                logger.info("Resolved %s adapter using '%s'", self.library, probe.name)
                return adapter, probe.name

            logger.debug("Probe '%s' did not match %s", probe.name, self.library)

        logger.warning(
            "No calling convention matched %s (tried: %s); its formats are unavailable",
            self.library,
            ", ".join(self.probe_names),
        )
        return None, None
