"""Color palette (colorblind-safe defaults)."""

from assemblyline.models import ItemCategory

# RGB tuples
BG = (18, 18, 24)
BELT = (52, 52, 64)
BELT_STRIPE = (70, 70, 86)
HUD_TEXT = (220, 220, 220)
DIM_TEXT = (120, 120, 140)
CORRECT = (80, 220, 100)
INCORRECT = (220, 60, 60)
MISSED = (245, 166, 66)
HEART = (230, 70, 90)
POWER_READY = (245, 220, 50)
POWER_ACTIVE = (80, 220, 100)
POWER_COOLDOWN = (90, 90, 100)
HIGHLIGHT = (255, 255, 255)

CATEGORY_COLORS = {
    ItemCategory.FRUIT: (66, 135, 245),
    ItemCategory.TECH: (170, 110, 240),
    ItemCategory.DEFECTIVE: (245, 166, 66),
}
