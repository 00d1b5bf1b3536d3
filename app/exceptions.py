class AppException(Exception):
    """
    Базовый класс для всех исключений приложения.
    """
    pass


class NotFoundError(AppException):
    """
    Полигон не найден (update/delete по неизвестному id).
    """
    pass


class ValidationError(AppException):
    """
    Ошибка валидации входных данных: пустое имя или меньше трёх вершин.
    """
    pass


class TransientStoreError(AppException):
    """
    БД недоступна или не ответила вовремя. Запрос завершается ошибкой 500.
    """
    pass


class TransientCacheError(AppException):
    """
    Redis недоступен, не ответил вовремя или вернул битый снимок.
    Наружу не пробрасывается: считается промахом кэша.
    """
    pass
