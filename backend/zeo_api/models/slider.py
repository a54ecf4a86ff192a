from .base import RecordModel


class Slider(RecordModel):
    order_index: int = 0
    is_active: bool = True
