import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .models import Product

# This file holds the in-memory product store and its lock.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Видеокарта Palit GeForce RTX 4060 Dual",
        "category": "Видеокарты",
        "description": "8 ГБ GDDR6, 128 бит, PCI-E 4.0, DLSS 3",
        "price": 32999,
        "stock": 14,
        "rating": 4.7,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/rtx4060.jpg",
    },
    {
        "id": 2,
        "name": "Процессор AMD Ryzen 5 7500F OEM",
        "category": "Процессоры",
        "description": "AM5, 6 x 3.7 ГГц, L3 32 МБ, без встроенной графики",
        "price": 13299,
        "stock": 30,
        "rating": 4.8,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/ryzen7500f.jpg",
    },
    {
        "id": 3,
        "name": "Материнская плата MSI PRO B650M-P",
        "category": "Материнские платы",
        "description": "AM5, AMD B650, 4 x DDR5, Micro-ATX",
        "price": 11499,
        "stock": 8,
        "rating": 4.5,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/b650mp.jpg",
    },
    {
        "id": 4,
        "name": "Оперативная память Kingston FURY Beast 32 ГБ",
        "category": "Оперативная память",
        "description": "DDR5, 6000 МГц, 2 x 16 ГБ, CL30",
        "price": 10999,
        "stock": 21,
        "rating": 4.9,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/furybeast.jpg",
    },
    {
        "id": 5,
        "name": "1000 ГБ M.2 NVMe накопитель Samsung 980",
        "category": "Накопители",
        "description": "PCI-E 3.0 x4, чтение 3500 Мбайт/сек, запись 3000 Мбайт/сек",
        "price": 7799,
        "stock": 0,
        "rating": 4.6,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/samsung980.jpg",
    },
    {
        "id": 6,
        "name": "27\" Монитор AOC 27G2SPU",
        "category": "Мониторы",
        "description": "1920x1080, IPS, 165 Гц, 1 мс",
        "price": 16999,
        "stock": 5,
        "rating": 4.4,
        "image": "https://c.dns-shop.ru/thumb/st1/fit/300/300/27g2spu.jpg",
    },
]


class CatalogStore:
    """Ordered in-memory collection of products.

    The store owns its list; callers get it through the app state rather
    than a module global. Every mutation runs under one lock, so picking
    the next id and appending the record happen as a single step.
    """

    def __init__(self, products: Iterable[Dict[str, Any]] = ()):
        self._items: List[Product] = []
        self._lock = threading.Lock()
        self.reset(products)

    def __len__(self) -> int:
        return len(self._items)

    def reset(self, products: Iterable[Dict[str, Any]] = ()) -> None:
        items = [Product(**p) for p in products]
        with self._lock:
            self._items = items
        logger.debug("store reset with %d products", len(items))

    def list(self, category: Optional[str] = None) -> List[Product]:
        with self._lock:
            items = list(self._items)
        if category:
            items = [p for p in items if p.category == category]
        return items

    def find(self, product_id: int) -> Optional[Product]:
        with self._lock:
            for p in self._items:
                if p.id == product_id:
                    return p
        return None

    def insert(self, fields: Dict[str, Any]) -> Product:
        with self._lock:
            next_id = max((p.id for p in self._items), default=0) + 1
            product = Product(**{**fields, "id": next_id})
            self._items.append(product)
        return product

    def update(self, product_id: int, fields: Dict[str, Any]) -> Optional[Product]:
        changes = {k: v for k, v in fields.items() if k != "id"}
        with self._lock:
            for i, p in enumerate(self._items):
                if p.id == product_id:
                    updated = p.model_copy(update=changes)
                    self._items[i] = updated
                    return updated
        return None

    def delete(self, product_id: int) -> bool:
        with self._lock:
            for i, p in enumerate(self._items):
                if p.id == product_id:
                    del self._items[i]
                    return True
        return False
