"""
Discord API Wrapper
~~~~~~~~~~~~~~~~~~~

A cache-first wrapper for the Discord REST API.

:copyright: (c) 2024-present MCausc78
:license: MIT, see LICENSE for more details.

"""

from . import (
    abc as abc,
    routes as routes,
    utils as utils,
)

from .base import *
from .channel import *
from .client import *
from .collection import *
from .command import *
from .core import *
from .enums import *
from .errors import *
from .guild import *
from .http import *
from .managers import *
from .message import *
from .parser import *
from .state import *
from .user import *
from .utils import *

import typing

if typing.TYPE_CHECKING:
    from . import raw as raw

del typing
