from .channels import *
from .commands import *
from .guilds import *
from .messages import *
from .users import *
