from typing import List, Optional, Protocol

from beacon.domains.pages.entities import EditorState, Page


FORMAT_COMMANDS = ("bold", "italic", "underline")


class EditorSurface(Protocol):
    """Поверхность редактора, с которой ядро обменивается заголовком и содержимым"""

    def read(self) -> Optional[EditorState]:
        ...

    def show(self, page: Page) -> None:
        ...

    def apply_format(self, command: str) -> None:
        ...

    def append_markup(self, markup: str) -> None:
        ...


class BufferedEditorSurface:
    """Буфер состояния редактора, который UI заполняет через API"""

    def __init__(self):
        self._state: Optional[EditorState] = None
        self.pending_commands: List[str] = []

    def read(self) -> Optional[EditorState]:
        if self._state is None:
            return None
        return EditorState(title=self._state.title, content=self._state.content)

    def show(self, page: Page) -> None:
        """Загрузка страницы в редактор"""
        self._state = EditorState(title=page.title, content=page.content)

    def push(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        """Обновление буфера текущими значениями из UI"""
        if self._state is None:
            self._state = EditorState(title=title or "", content=content or "")
            return
        if title is not None:
            self._state.title = title
        if content is not None:
            self._state.content = content

    def apply_format(self, command: str) -> None:
        # Разметку выделения применяет сам UI, здесь команда только ставится в очередь
        self.pending_commands.append(command)

    def append_markup(self, markup: str) -> None:
        if self._state is None:
            self._state = EditorState(title="", content=markup)
        else:
            self._state.content += markup

    def drain_commands(self) -> List[str]:
        commands, self.pending_commands = self.pending_commands, []
        return commands
