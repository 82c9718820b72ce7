"""Keyword-based storefront category detection for scraped product names.

Matching is plain lower-case substring search. Categories are scanned in
declaration order and the first hit wins, so a name that mentions both a
hardware and a peripherals keyword lands in hardware. Substring collisions
("hd" inside "hdmi") are a known limitation of this approach.
"""
from enum import IntEnum


class CategoryId(IntEnum):
    HARDWARE = 1
    PERIPHERALS = 2
    COMPUTERS = 3
    GAMES = 4
    MOBILE = 5
    TV_AUDIO = 6
    SPEAKERS = 7
    GAMER_FURNITURE = 8
    SMART_HOME = 9
    POWER = 10


DEFAULT_CATEGORY = CategoryId.PERIPHERALS

CATEGORY_KEYWORDS: list[tuple[CategoryId, tuple[str, ...]]] = [
    (CategoryId.HARDWARE, (
        "processador", "cpu", "ryzen", "intel core", "placa de vídeo", "gpu", "rtx", "gtx",
        "radeon", "memória ram", "ddr4", "ddr5", "ssd", "nvme", "hd", "hard disk", "fonte",
        "psu", "placa mãe", "motherboard", "cooler", "water cooler", "gabinete", "case",
    )),
    (CategoryId.PERIPHERALS, (
        "mouse", "teclado", "keyboard", "headset", "fone", "headphone", "webcam", "câmera",
        "microfone", "mic", "mousepad", "monitor", "display", "controle", "gamepad",
    )),
    (CategoryId.COMPUTERS, (
        "notebook", "laptop", "desktop", "pc gamer", "computador", "all in one",
        "workstation", "mini pc", "chromebook", "ultrabook", "tablet",
    )),
    (CategoryId.GAMES, (
        "console", "playstation", "ps5", "ps4", "xbox", "nintendo", "switch", "jogo", "game",
        "volante", "racing wheel", "cadeira gamer", "mesa gamer",
    )),
    (CategoryId.MOBILE, (
        "celular", "smartphone", "iphone", "galaxy", "xiaomi", "redmi", "motorola", "samsung",
        "capa celular", "película", "carregador celular", "fone bluetooth", "smartwatch",
        "relógio inteligente",
    )),
    (CategoryId.TV_AUDIO, (
        "tv", "televisão", "smart tv", "4k tv", "8k tv", "suporte tv", "conversor", "antena",
        "soundbar", "home theater", "receiver",
    )),
    (CategoryId.SPEAKERS, (
        "caixa de som", "alto-falante", "speaker", "jbl", "amplificador", "interface de áudio",
        "monitor de referência", "subwoofer",
    )),
    (CategoryId.GAMER_FURNITURE, (
        "cadeira gamer", "mesa gamer", "suporte monitor", "braço articulado", "iluminação rgb",
        "led strip", "decoração gamer", "organizador", "tapete",
    )),
    (CategoryId.SMART_HOME, (
        "alexa", "google home", "assistente virtual", "lâmpada inteligente", "smart light",
        "tomada inteligente", "câmera segurança", "fechadura inteligente", "sensor",
    )),
    (CategoryId.POWER, (
        "nobreak", "ups", "estabilizador", "filtro de linha", "power bank", "bateria externa",
        "carregador portátil", "painel solar",
    )),
]


def classify(product_name: str | None) -> CategoryId:
    """Return the category for a product name; never fails."""
    name = (product_name or "").lower()
    if not name:
        return DEFAULT_CATEGORY
    for category_id, keywords in CATEGORY_KEYWORDS:
        for keyword in keywords:
            if keyword in name:
                return category_id
    return DEFAULT_CATEGORY
