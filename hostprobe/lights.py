"""Пользовательские индикаторы из переменных HOSTPROBE_LIGHT_*.

Формат переменной: HOSTPROBE_LIGHT_<ИМЯ>_<HEX|ПСЕВДОНИМ>[_<СТИЛЬ>...]=<пояснение>
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

from hostprobe.config import LIGHT_PREFIX
from hostprobe.models import Light

logger = logging.getLogger(__name__)

# Имя стиля → аргументы click.style
STYLE_MAP: dict[str, dict[str, Any]] = {
    "FGBLACK": {"fg": "black"},
    "FGRED": {"fg": "red"},
    "FGGREEN": {"fg": "green"},
    "FGYELLOW": {"fg": "yellow"},
    "FGBLUE": {"fg": "blue"},
    "FGMAGENTA": {"fg": "magenta"},
    "FGCYAN": {"fg": "cyan"},
    "FGWHITE": {"fg": "white"},
    "FGHIBLACK": {"fg": "bright_black"},
    "FGHIRED": {"fg": "bright_red"},
    "FGHIGREEN": {"fg": "bright_green"},
    "FGHIYELLOW": {"fg": "bright_yellow"},
    "FGHIBLUE": {"fg": "bright_blue"},
    "FGHIMAGENTA": {"fg": "bright_magenta"},
    "FGHICYAN": {"fg": "bright_cyan"},
    "FGHIWHITE": {"fg": "bright_white"},
    "BGBLACK": {"bg": "black"},
    "BGRED": {"bg": "red"},
    "BGGREEN": {"bg": "green"},
    "BGYELLOW": {"bg": "yellow"},
    "BGBLUE": {"bg": "blue"},
    "BGMAGENTA": {"bg": "magenta"},
    "BGCYAN": {"bg": "cyan"},
    "BGWHITE": {"bg": "white"},
    "BGHIBLACK": {"bg": "bright_black"},
    "BGHIRED": {"bg": "bright_red"},
    "BGHIGREEN": {"bg": "bright_green"},
    "BGHIYELLOW": {"bg": "bright_yellow"},
    "BGHIBLUE": {"bg": "bright_blue"},
    "BGHIMAGENTA": {"bg": "bright_magenta"},
    "BGHICYAN": {"bg": "bright_cyan"},
    "BGHIWHITE": {"bg": "bright_white"},
    "BOLD": {"bold": True},
    "DIM": {"dim": True},
    "UNDERLINE": {"underline": True},
    "BLINK": {"blink": True},
    "REVERSEVIDEO": {"reverse": True},
}

# Псевдоним → код символа в hex
EMOJI_ALIASES: dict[str, str] = {
    "CRYSTALBALL": "1F52E",
    "SHOPPINGCART": "1F6D2",
    "NOENTRY": "26D4",
    "NOENTRYSIGN": "1F6AB",
    "CROSSMARK": "274C",
    "CHECKMARK": "2705",
    "QUESTIONMARK": "2753",
    "EXCLAMATIONMARK": "2757",
    "ANTENNAWITHBARS": "1F4F6",
    "SQUAREDSOS": "1F198",
    "LINK": "1F517",
    "WRENCH": "1F527",
    "SHIELD": "1F6E1",
    "HAMMERANDWRENCH": "1F6E0",
    "KEY": "1F511",
    "LOCK": "1F512",
    "PAPERCLIP": "1F4CE",
    "PUSHPIN": "1F4CC",
    "FILEFOLDER": "1F4C1",
    "SCROLL": "1F4DC",
    "NOTEBOOK": "1F4D3",
    "LIGHTBULB": "1F4A1",
    "MAGNIFYINGGLASS": "1F50D",
}

DEFAULT_DIAGNOSTIC = "Диагностика не указана."


def glyph_from_code(code: str) -> Optional[str]:
    """Символ по hex-коду или псевдониму; None, если код некорректен."""
    hexcode = EMOJI_ALIASES.get(code.upper(), code)
    try:
        codepoint = int(hexcode, 16)
    except ValueError:
        return None
    # Суррогаты не кодируются в UTF-8, NUL обрезает вывод терминала
    if codepoint <= 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return None
    return chr(codepoint)


def parse_light(var: str, value: str) -> Optional[Light]:
    """Разобрать одну переменную; None, если это не индикатор или формат неверен."""
    if not var.startswith(LIGHT_PREFIX):
        return None
    parts = var[len(LIGHT_PREFIX):].split("_")
    if len(parts) < 2 or not parts[0]:
        logger.debug("Пропуск %s: ожидается %s<ИМЯ>_<HEX>", var, LIGHT_PREFIX)
        return None

    name, code, styles = parts[0], parts[1], parts[2:]
    glyph = glyph_from_code(code)
    if glyph is None:
        logger.debug("Пропуск %s: некорректный код символа %r", var, code)
        return None

    return Light(
        name=name,
        glyph=glyph,
        diagnostic=value or DEFAULT_DIAGNOSTIC,
        styles=[s for s in styles if s in STYLE_MAP],
        unset=f"unset {var}",
    )


def parse_lights(environ: Optional[Mapping[str, str]] = None) -> list[Light]:
    """Все индикаторы окружения, упорядоченные по имени переменной."""
    env = os.environ if environ is None else environ
    lights = []
    for var in sorted(env):
        light = parse_light(var, env[var])
        if light is not None:
            lights.append(light)
    return lights


def style_kwargs(light: Light) -> dict[str, Any]:
    """Аргументы click.style для индикатора (поздние стили перекрывают ранние)."""
    kwargs: dict[str, Any] = {}
    for style in light.styles:
        kwargs.update(STYLE_MAP[style])
    return kwargs
