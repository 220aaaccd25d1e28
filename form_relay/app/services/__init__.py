"""
Service layer.

``relay_service`` validates submissions and formats the notification
text; ``telegram_client`` performs the single outbound Bot API call.
Endpoints only translate the exceptions raised here into responses.
"""
