"""Bot router composition."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command

from src.bot.handlers import handle_help, handle_message

router = Router(name="portfolio")
router.message.register(handle_help, Command("start", "help"))
router.message.register(handle_message)
