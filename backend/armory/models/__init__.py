from .movements import PurchaseRow, TransferRow, AssignmentRow

__all__ = [
    'PurchaseRow', 'TransferRow', 'AssignmentRow',
]
