"""modelpath: path expressions over observable models, with live change tracking."""

from importlib.metadata import version as _version

__version__ = _version("modelpath")

from modelpath.errors import (
    PathError,
    PathSyntaxError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from modelpath.parser import AttributeAccess, CollectionItemAccess, parse, check_path
from modelpath.accessor import Accessor, SubscriptionRecord, accessor_for, build
from modelpath.tracker import ChangeEvent, ChangeTracker, change_tracker_for
from modelpath.containers import ObservableFieldContainer, ObservableOrderedContainer
from modelpath.observable import Model, Collection, set_scheduler
from modelpath.events import Events

__all__ = [
    "PathError",
    "PathSyntaxError",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "AttributeAccess",
    "CollectionItemAccess",
    "parse",
    "check_path",
    "Accessor",
    "SubscriptionRecord",
    "accessor_for",
    "build",
    "ChangeEvent",
    "ChangeTracker",
    "change_tracker_for",
    "ObservableFieldContainer",
    "ObservableOrderedContainer",
    "Model",
    "Collection",
    "set_scheduler",
    "Events",
]
