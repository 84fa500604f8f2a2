# app/utils/pagination.py
import math
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_paging(
    page: int,
    page_size: int,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Tuple[int, int]:
    """
    校正分頁參數
    - page < 1 視為 1
    - page_size <= 0 使用預設值 (注意：不是夾到 1)
    - page_size 超過上限時夾到上限
    """
    page = page if page and page >= 1 else 1
    if not page_size or page_size <= 0:
        page_size = default_page_size
    page_size = min(page_size, max_page_size)
    return page, page_size


def calculate_total_pages(total_count: int, page_size: int) -> int:
    # page_size 為 0 時避免除以零
    if page_size == 0:
        return 0
    return math.ceil(total_count / page_size)


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def split_filter_tokens(raw: Optional[str]) -> List[str]:
    """
    將 "C#, Go ,," 這類篩選字串切成 ["C#", "Go"]
    (以逗號分隔、去除空白、丟棄空字串；大小寫由資料庫比對時處理)
    """
    if not raw or not raw.strip():
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


class PagedResult(Generic[T]):
    """
    分頁查詢結果：當頁資料 + 篩選後總筆數 + 分頁資訊
    (不可改成 dataclass：FastAPI 會對 dataclass 回傳值做 asdict，深拷貝 ORM 物件)
    """

    def __init__(
        self,
        items: Optional[Sequence[T]] = None,
        total_count: int = 0,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.items = list(items or [])
        self.total_count = total_count
        self.page = page
        self.page_size = page_size

    def __repr__(self) -> str:
        return (
            f"PagedResult(total_count={self.total_count}, page={self.page}, "
            f"page_size={self.page_size}, items={len(self.items)})"
        )

    @property
    def total_pages(self) -> int:
        return calculate_total_pages(self.total_count, self.page_size)
