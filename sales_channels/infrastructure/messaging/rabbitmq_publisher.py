# sales_channels/infrastructure/messaging/rabbitmq_publisher.py

import json
from typing import Dict

import aio_pika


class RabbitMQPublisher:
    def __init__(self, url: str):
        self._url = url
        self._connection = None
        self._channel = None
        self._exchanges: Dict[str, aio_pika.abc.AbstractExchange] = {}

    async def connect(self):
        self._connection = await aio_pika.connect_robust(self._url)
        self._channel = await self._connection.channel()
        await self._channel.set_qos(prefetch_count=10)

    async def _exchange(self, exchange_name: str):
        exchange = self._exchanges.get(exchange_name)
        if exchange is None:
            exchange = await self._channel.declare_exchange(
                exchange_name,
                aio_pika.ExchangeType.TOPIC,
                durable=True,
            )
            self._exchanges[exchange_name] = exchange
        return exchange

    async def publish(
        self,
        exchange_name: str,
        routing_key: str,
        message: dict,
        idempotency_key: str,
    ):

        if not self._channel:
            await self.connect()

        exchange = await self._exchange(exchange_name)

        msg = aio_pika.Message(
            body=json.dumps(message, default=str).encode(),
            content_type="application/json",
            delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            message_id=idempotency_key,
            headers={
                "idempotency_key": idempotency_key,
            },
        )

        await exchange.publish(msg, routing_key=routing_key)

    async def close(self):
        if self._connection is not None:
            await self._connection.close()
        self._connection = None
        self._channel = None
        self._exchanges.clear()
