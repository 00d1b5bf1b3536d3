# Пакет моделей базы данных
# Здесь импортируются все модели, чтобы create_all их обнаружил
from .polygon import Polygon
