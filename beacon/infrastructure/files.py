import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    success: bool
    content: Optional[str] = None
    error: Optional[str] = None


class FileAccess(Protocol):
    """Чтение и запись файлов по пути"""

    async def write_file(self, path: Union[str, Path], content: str) -> FileResult:
        ...

    async def read_file(self, path: Union[str, Path]) -> FileResult:
        ...


class LocalFileAccess:
    """Доступ к локальной файловой системе"""

    async def write_file(self, path: Union[str, Path], content: str) -> FileResult:
        try:
            await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")
            return FileResult(success=True)
        except OSError as e:
            logger.error(f"Failed to write file {path}: {e}")
            return FileResult(success=False, error=str(e))

    async def read_file(self, path: Union[str, Path]) -> FileResult:
        try:
            content = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
            return FileResult(success=True, content=content)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read file {path}: {e}")
            return FileResult(success=False, error=str(e))
