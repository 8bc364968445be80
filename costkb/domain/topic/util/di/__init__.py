from costkb.domain.topic.util.di.provider import TopicProvider

__all__ = ["TopicProvider"]
