class ForumError(Exception):
    """Base class for application level failures"""


class TopicAlreadyTrackedError(ForumError):
    """Raised when update() is called on a topic the session already tracks"""

    def __init__(self, topic_id):
        self.topic_id = topic_id
        super().__init__(
            f"Topic {topic_id} already exists in the session - you do not need "
            "to call update. Changes are saved on commit"
        )
