"""Line classifiers for the goteo boundary scanner.

Each classifier is a mixin that provides classification logic for
a specific block type. Classifiers are pure checks over one line of
content; only the fence classifier touches scan state.
"""

from goteo.scanner.classifiers.fence import (
    FenceClassifierMixin,
)
from goteo.scanner.classifiers.heading import (
    HeadingClassifierMixin,
)
from goteo.scanner.classifiers.list import (
    ListClassifierMixin,
)
from goteo.scanner.classifiers.table import (
    TableClassifierMixin,
)

__all__ = [
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
    "TableClassifierMixin",
]
