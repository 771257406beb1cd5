"""
AI collaborator seam. Real providers implement AIClient; MockAIClient returns a
deterministic landing schema for development, tests and the CLI.
"""
import json
import logging
from typing import Any, Dict, Protocol

logger = logging.getLogger(__name__)

MAX_TITLE_WORDS = 8


class AIClient(Protocol):
    def generate_landing_schema(self, prompt: str, payment_url: str) -> str:
        ...


def extract_title(prompt: str) -> str:
    """First words of the prompt, capitalized; a stock title when the prompt is blank."""
    words = (prompt or "").split()
    if not words:
        return "Ваш новый лендинг"
    title = " ".join(words[:MAX_TITLE_WORDS]).rstrip(".,!?;:")
    return title[:1].upper() + title[1:]


class MockAIClient:
    """Offline stand-in for an AI provider."""

    provider = "mock"

    def generate_landing_schema(self, prompt: str, payment_url: str) -> str:
        logger.info("Generating landing schema with mock provider")
        title = extract_title(prompt)
        schema: Dict[str, Any] = {
            "version": "1.0",
            "theme": {
                "palette": {
                    "primary": "#2563EB",
                    "secondary": "#7C3AED",
                    "accent": "#F97316",
                    "background": "#FFFFFF",
                    "text": "#1F2937",
                },
            },
            "payment": {"url": payment_url or "", "buttonText": "Оплатить"},
            "pages": [
                {
                    "path": "/",
                    "title": title,
                    "description": "Сгенерированный лендинг с помощью AI",
                    "blocks": [
                        {
                            "type": "hero",
                            "order": 0,
                            "props": {
                                "headline": title,
                                "subheadline": "Превратите свою идею в реальность",
                                "ctaText": "Начать сейчас",
                                "image": "https://images.unsplash.com/photo-1498050108023-c5249f4df085?w=1200",
                            },
                        },
                        {
                            "type": "features",
                            "order": 1,
                            "props": {
                                "title": "Наши преимущества",
                                "items": [
                                    {"icon": "⚡", "title": "Быстро", "description": "Запустите ваш проект за считанные минуты"},
                                    {"icon": "🎯", "title": "Эффективно", "description": "Проверенные решения для вашего бизнеса"},
                                    {"icon": "💡", "title": "Инновационно", "description": "Современные технологии и подходы"},
                                ],
                            },
                        },
                        {
                            "type": "pricing",
                            "order": 2,
                            "props": {
                                "title": "Тарифы",
                                "plans": [
                                    {
                                        "name": "Базовый",
                                        "price": "9990",
                                        "currency": "₽",
                                        "period": "месяц",
                                        "features": ["Все базовые функции", "Email поддержка", "1 пользователь"],
                                    },
                                    {
                                        "name": "Премиум",
                                        "price": "19990",
                                        "currency": "₽",
                                        "period": "месяц",
                                        "featured": True,
                                        "features": ["Все функции Базового", "Приоритетная поддержка", "До 10 пользователей", "Аналитика"],
                                    },
                                ],
                            },
                        },
                        {
                            "type": "testimonials",
                            "order": 3,
                            "props": {
                                "title": "Отзывы клиентов",
                                "items": [
                                    {"text": "Запустили лендинг за вечер", "author": "Анна", "role": "Основатель студии", "rating": 5},
                                    {"text": "Конверсия выросла в два раза", "author": "Игорь", "role": "Маркетолог", "rating": 5},
                                ],
                            },
                        },
                        {
                            "type": "faq",
                            "order": 4,
                            "props": {
                                "title": "Частые вопросы",
                                "items": [
                                    {"question": "Сколько времени занимает запуск?", "answer": "Обычно несколько минут."},
                                    {"question": "Можно ли изменить дизайн?", "answer": "Да, опишите изменения в чате."},
                                ],
                            },
                        },
                        {
                            "type": "cta",
                            "order": 5,
                            "props": {
                                "title": "Готовы начать?",
                                "description": "Оставьте заявку, и мы свяжемся с вами",
                            },
                        },
                    ],
                }
            ],
        }
        return json.dumps(schema, ensure_ascii=False)
