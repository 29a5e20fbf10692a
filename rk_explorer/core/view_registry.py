from __future__ import annotations
from typing import Dict, List, Type

from .tableau import TableauRegistration
from .base_view import BaseView


class ViewRegistry:
    """
    Registry for view classes so the detail panel can offer plots dynamically

    Purpose:
    - Decouples the UI layer from hardcoded view implementations by exposing {@link create(view_id, registration)}
    - Enables dynamic construction of the plot selector based on the registered views rather than hardcoded lists

    Design Notes:
    - Stores the subclasses of {@link BaseView}, not instances, so that each view can be instantiated on demand
    - Enforces invariants:
        * only {@link BaseView} subclasses can be registered
        * each view 'id' is unique across the registry
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        Register a {@link BaseView} with the registry

        :param view_cls: the subclass of {@link BaseView}

        Raises:
            TypeError: if view_cls is not a subclass of {@link BaseView}
            ValueError: if a view with same 'id' already exists
        """

        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._views[view_cls.id] = view_cls

    def create(self, view_id: str, registration: TableauRegistration) -> BaseView:
        """
        Instantiate a view for the given view_id.

        Raises:
            KeyError: if no view with the given id exists in the registry
        """
        try:
            cls = self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found")
        return cls(registration)

    def all_classes(self) -> List[Type[BaseView]]:
        """
        Used at UI layer to build the plot selector. Keeps UI fully driven by the registry.
        """
        return list(self._views.values())

    def __contains__(self, view_id: str) -> bool:
        return view_id in self._views
