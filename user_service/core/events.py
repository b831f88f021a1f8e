import json
import logging
import threading
from typing import Dict, Any

import pika
import pika.exceptions

from .config import get_settings

logger = logging.getLogger(__name__)


class UserEventPublisher:
    """RabbitMQ publisher for user events"""

    def __init__(self, url: str, exchange: str = "user_events", enabled: bool = True):
        self.url = url
        self.exchange = exchange
        self.enabled = enabled
        self.connection = None
        self.channel = None
        # pika connections are not thread-safe; handlers run in a thread pool
        self._lock = threading.RLock()

    def connect(self) -> bool:
        """Establish connection to RabbitMQ"""
        if not self.enabled:
            return False

        with self._lock:
            return self._connect()

    def _connect(self) -> bool:
        try:
            parameters = pika.URLParameters(self.url)
            self.connection = pika.BlockingConnection(parameters)
            self.channel = self.connection.channel()

            # Declare exchange
            self.channel.exchange_declare(
                exchange=self.exchange,
                exchange_type='topic',
                durable=True
            )

            logger.info(f"Connected to RabbitMQ exchange '{self.exchange}'")
            return True

        except pika.exceptions.AMQPConnectionError as e:
            logger.warning(f"Could not connect to RabbitMQ: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error connecting to RabbitMQ: {e}")
            return False

    def publish_event(self, event_type: str, data: Dict[str, Any]) -> bool:
        """Publish event to RabbitMQ, using the event type as routing key"""
        if not self.enabled:
            return False

        with self._lock:
            if not self.connection or self.connection.is_closed:
                if not self._connect():
                    logger.warning(f"Failed to publish {event_type} event - no connection")
                    return False

            return self._publish(event_type, data)

    def _publish(self, event_type: str, data: Dict[str, Any]) -> bool:
        try:
            message = {
                'event_type': event_type,
                'data': data
            }

            self.channel.basic_publish(
                exchange=self.exchange,
                routing_key=event_type,
                body=json.dumps(message),
                properties=pika.BasicProperties(
                    delivery_mode=2,  # Persistent
                    content_type='application/json'
                )
            )

            logger.info(f"Published {event_type} event to RabbitMQ")
            return True

        except Exception as e:
            logger.error(f"Error publishing {event_type} event: {e}")
            return False

    def close(self):
        """Close connection"""
        try:
            with self._lock:
                if self.connection and not self.connection.is_closed:
                    self.connection.close()
                    logger.info("RabbitMQ connection closed")
        except Exception as e:
            logger.error(f"Error closing connection: {e}")


settings = get_settings()

# Global publisher instance
event_publisher = UserEventPublisher(
    url=settings.rabbitmq_url,
    exchange=settings.rabbitmq_exchange,
    enabled=settings.events_enabled
)


def get_event_publisher() -> UserEventPublisher:
    """Dependency returning the process-wide publisher"""
    return event_publisher
