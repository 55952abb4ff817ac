# Import all models here
from adaptfit.models.user import User
from adaptfit.models.kv_entry import KVEntry
