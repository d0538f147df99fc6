from typing import List, Optional


class BeaconError(Exception):
    """Базовое исключение ядра документов"""


class StorageUnavailable(BeaconError):
    """Ошибка чтения или записи хранилища"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MalformedImport(BeaconError, ValueError):
    """Импортируемые данные не прошли валидацию"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidSelection(BeaconError):
    """Индекс или идентификатор страницы вне диапазона"""


class CannotDeleteLastPage(BeaconError):
    """Попытка удалить единственную оставшуюся страницу"""

    def __init__(self, message: str = "Cannot delete the only remaining page"):
        super().__init__(message)
