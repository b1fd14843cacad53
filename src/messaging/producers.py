"""
Публикация событий аудита в Kafka.

Продюсер создается лениво при первом событии и сохраняется только после
успешного старта. Ошибки брокера не прерывают запрос: они пишутся в лог.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from aiokafka import AIOKafkaProducer

from src.core.config import settings

logger = logging.getLogger(__name__)

audit_producer: Optional[AIOKafkaProducer] = None


def encode_audit_event(event: Dict[str, Any]) -> bytes:
    """Сериализует событие в JSON; даты пишутся в ISO-формате."""

    def default(value: Any) -> str:
        if isinstance(value, datetime):
            return value.isoformat()
        raise TypeError(f"Cannot serialize {type(value).__name__} in audit event")

    return json.dumps(event, default=default).encode("utf-8")


async def get_audit_producer() -> AIOKafkaProducer:
    global audit_producer
    if audit_producer is None:
        candidate = AIOKafkaProducer(
            bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
            client_id=settings.PROJECT_NAME,
            value_serializer=encode_audit_event,
        )
        try:
            await candidate.start()
        except Exception:
            await candidate.stop()
            raise
        audit_producer = candidate
    return audit_producer


async def stop_audit_producer() -> None:
    """Останавливает продюсер при завершении приложения."""
    global audit_producer
    if audit_producer is not None:
        producer, audit_producer = audit_producer, None
        await producer.stop()


async def publish_audit_event(event_type: str, subject_id: int, payload: Dict[str, Any]) -> bool:
    """
    Отправляет событие в топик аудита, ключ сообщения - ID субъекта,
    чтобы события одного пользователя попадали в одну партицию.

    Возвращает True, если брокер подтвердил запись.
    """
    if not settings.KAFKA_ENABLED:
        logger.debug(f"Kafka disabled, {event_type} for {subject_id} kept in the log only")
        return False

    try:
        producer = await get_audit_producer()
        await producer.send_and_wait(
            settings.AUDIT_TOPIC,
            {"event_type": event_type, "data": payload},
            key=str(subject_id).encode("utf-8"),
        )
    except Exception as e:
        logger.error(f"Failed to publish {event_type} for {subject_id} to {settings.AUDIT_TOPIC}: {e}")
        return False

    logger.info(f"Published {event_type} for {subject_id} to {settings.AUDIT_TOPIC}")
    return True
