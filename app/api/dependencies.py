import asyncio
from collections.abc import Awaitable, Callable, Mapping

from fastapi import Request

from app.config.settings import Settings
from app.pipeline.processor import DocumentProcessor, build_blog_processor, build_react_processor

ProcessorBuilder = Callable[[Settings], Awaitable[DocumentProcessor]]

BLOG = "blog"
REACT = "react"

DEFAULT_BUILDERS: dict[str, ProcessorBuilder] = {
    BLOG: build_blog_processor,
    REACT: build_react_processor,
}


class ProcessorRegistry:
    """Builds each workflow's processor on first use and reuses it afterwards.

    Building lazily keeps a missing credential for one workflow from taking
    down the other: the ConfigurationError surfaces on the request that needs it.
    A failed build is not cached, so fixing the environment takes effect on restart.
    """

    def __init__(
        self,
        settings: Settings,
        builders: Mapping[str, ProcessorBuilder] | None = None,
        processors: Mapping[str, DocumentProcessor] | None = None,
    ) -> None:
        self._settings = settings
        self._builders = dict(DEFAULT_BUILDERS if builders is None else builders)
        self._processors: dict[str, DocumentProcessor] = dict(processors or {})
        self._lock = asyncio.Lock()

    async def get(self, kind: str) -> DocumentProcessor:
        async with self._lock:
            processor = self._processors.get(kind)
            if processor is None:
                builder = self._builders.get(kind)
                if builder is None:
                    raise KeyError(f"No processor registered for '{kind}'")
                processor = await builder(self._settings)
                self._processors[kind] = processor
            return processor

    async def aclose(self) -> None:
        for processor in self._processors.values():
            await processor.aclose()
        self._processors.clear()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> ProcessorRegistry:
    return request.app.state.registry
