"""Editor session: keeps an editing surface supplied with declarations.

The session owns one ImportResolver. Edits are debounced into resolution
passes; while a pass is running further change signals are dropped (the
next edit re-arms the timer), so at most one pass is in flight.
"""

from __future__ import annotations

import logging

from auto_typings import progress
from auto_typings.cache.protocol import SourceCacheProtocol
from auto_typings.cache.registry import CacheRegistry
from auto_typings.cache.simple import SimpleCache
from auto_typings.debounce import Debouncer
from auto_typings.depth import RecursionBudget
from auto_typings.editor.protocol import EditorSurfaceProtocol
from auto_typings.editor.protocol import Subscription
from auto_typings.host.memory import InMemoryHost
from auto_typings.host.protocol import TypeCheckingHostProtocol
from auto_typings.options import Options
from auto_typings.paths import dirname
from auto_typings.resolver import ImportResolver
from auto_typings.sources.protocol import SourceResolverProtocol
from auto_typings.sources.unpkg import UnpkgSourceResolver

logger = logging.getLogger(__name__)


class AutoTypings:
    """Resolves declarations for everything an editor's content imports.

    Use create() rather than the constructor: it picks default
    collaborators and runs the first pass.

    Example:
        async with await AutoTypings.create(editor, options=Options(debounce_duration=1)) as typings:
            ...
    """

    def __init__(
        self,
        editor: EditorSurfaceProtocol,
        host: TypeCheckingHostProtocol,
        options: Options,
        source_cache: SourceCacheProtocol,
        source_resolver: SourceResolverProtocol,
    ) -> None:
        self.editor = editor
        self.host = host
        self.options = options
        self.source_cache = source_cache
        self.import_resolver = ImportResolver(
            options=options,
            source_cache=source_cache,
            source_resolver=source_resolver,
            host=host,
        )
        self.source_resolver = source_resolver
        self._owned_resolver: UnpkgSourceResolver | None = None
        self._is_resolving = False
        self._disposed = False
        self._debouncer = Debouncer(options.debounce_duration, self.resolve_contents)
        self._subscriptions: list[Subscription] = [editor.on_change(self._on_content_changed)]

    @classmethod
    async def create(
        cls,
        editor: EditorSurfaceProtocol,
        host: TypeCheckingHostProtocol | None = None,
        options: Options | None = None,
        source_cache: SourceCacheProtocol | None = None,
        source_resolver: SourceResolverProtocol | None = None,
        cache_registry: CacheRegistry | None = None,
    ) -> AutoTypings:
        """Attach a session to an editor and resolve its current content.

        Args:
            editor: Editing surface to follow.
            host: Receives declarations; in-memory under options.file_root_path by default.
            options: Options; defaults when omitted.
            source_cache: Cache for fetched files; a private SimpleCache by default.
            source_resolver: Fetches missing files; unpkg by default, closed by aclose().
            cache_registry: Supplies the shared cache when options.share_cache is set.

        Returns:
            The attached session, after its first pass.
        """
        options = options or Options()

        if options.share_cache and cache_registry is None:
            logger.warning("share_cache is set but no cache_registry was given, using a private cache")

        if options.share_cache and cache_registry is not None:
            provided = source_cache
            source_cache = cache_registry.get_or_create(factory=lambda: provided or SimpleCache())
        elif source_cache is None:
            source_cache = SimpleCache()

        owned_resolver = UnpkgSourceResolver() if source_resolver is None else None
        session = cls(
            editor=editor,
            host=host or InMemoryHost(options.file_root_path),
            options=options,
            source_cache=source_cache,
            source_resolver=source_resolver or owned_resolver,
        )
        session._owned_resolver = owned_resolver
        try:
            await session.resolve_contents()
        except BaseException:
            await session.aclose()
            raise
        return session

    @property
    def is_resolving(self) -> bool:
        return self._is_resolving

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop following the editor. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._debouncer.cancel()
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
        logger.debug(f"Disposed session for {self.editor.uri}")

    async def __aenter__(self) -> AutoTypings:
        return self

    async def aclose(self) -> None:
        """Dispose the session and close the source resolver if create() made it."""
        self.dispose()
        owned, self._owned_resolver = self._owned_resolver, None
        if owned is not None:
            await owned.aclose()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def set_versions(self, versions: dict[str, str]) -> None:
        """Pin package versions for subsequent passes."""
        self.import_resolver.set_versions(versions)
        self.options.versions = dict(versions)

    def clear_cache(self) -> None:
        self.source_cache.clear()

    def _on_content_changed(self) -> None:
        if self._is_resolving:
            logger.debug("Change signal dropped, a resolution pass is running")
            return

        progress.invoke_update(self.options, progress.CODE_CHANGED)
        self._debouncer.trigger()

    async def resolve_contents(self) -> None:
        """Run one resolution pass over the editor's current content.

        Does nothing if a pass is already running. Errors the resolver does
        not route to options.on_error are raised; the session stays usable.
        """
        if self._is_resolving:
            return

        self._is_resolving = True
        try:
            progress.invoke_update(self.options, progress.RESOLVE_NEW_IMPORTS)
            content = self.editor.get_text()

            await self.import_resolver.resolve_imports_in_file(
                content,
                dirname(self.editor.uri),
                RecursionBudget.from_options(self.options),
            )

            if self.import_resolver.were_new_imports_resolved():
                if not self.options.skip_refresh_after_resolve:
                    self.editor.refresh()
                self.import_resolver.reset_new_imports_resolved()
        finally:
            self._is_resolving = False
