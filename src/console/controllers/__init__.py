"""View controllers: list, detail and create/edit forms, one generic implementation per view kind."""

from .base import ViewStatus
from .detail_controller import DetailController, DetailState
from .form_controller import CreateFormController, EditFormController, FormState
from .list_controller import ListController, ListState

__all__ = [
    "CreateFormController",
    "DetailController",
    "DetailState",
    "EditFormController",
    "FormState",
    "ListController",
    "ListState",
    "ViewStatus",
]
