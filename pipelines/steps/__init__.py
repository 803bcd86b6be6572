# Namespace for pipeline steps
from .fetch_profile import FetchProfile  # noqa: F401
from .map_record import MapRecord  # noqa: F401
from .persist_record import PersistRecord  # noqa: F401
