from .data_models import *
from .exceptions import CredentialConfigError, EndfieldApiError, EndfieldError
