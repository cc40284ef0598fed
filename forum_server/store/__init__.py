from .topic_store import TopicReader, TopicStore  # noqa: F401
from .user_store import UserStore  # noqa: F401
