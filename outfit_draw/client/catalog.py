"""Fixed catalog of outfit suggestions, the random draw over it, and the donate tiers."""

import random
from typing import NamedTuple, Optional

SUGGESTIONS: tuple[str, ...] = (
    "藍色襯衫 + 灰色牛仔褲 + 白色板鞋 (Blue Shirt, Grey Jeans & White Sneakers)",
    "白色素T + 深藍色直筒褲 + 經典帆布鞋 (White Tee, Navy Pants & Canvas Shoes)",
    "黑色連帽衛衣 + 卡其色工裝褲 + 黑色運動鞋 (Black Hoodie, Khaki Cargo Pants & Black Runners)",
    "條紋襯衫 + 黑色西裝短褲 + 樂福鞋 (Striped Shirt, Black Shorts & Loafers)",
    "米色針織衫 + 咖啡色百褶裙 + 瑪莉珍鞋 (Beige Knit, Brown Skirt & Mary Janes)",
    "牛仔外套 + 灰色棉褲 + 高筒帆布鞋 (Denim Jacket, Grey Sweatpants & High-top Canvas)",
    "淺綠色亞麻衫 + 白色寬褲 + 涼鞋 (Light Green Linen Shirt, White Wide-leg Pants & Sandals)",
    "深灰色毛衣 + 黑色皮裙 + 短靴 (Dark Grey Sweater, Black Leather Skirt & Ankle Boots)",
    "粉色襯衫 + 淺藍色牛仔褲 + 淺色老爹鞋 (Pink Shirt, Light Blue Jeans & Chunky Sneakers)",
    "藏青色 Polo 衫 + 白色休閒褲 + 德訓鞋 (Navy Polo, White Chinos & Army Trainers)",
    "格紋西裝外套 + 黑色緊身褲 + 尖頭平底鞋 (Plaid Blazer, Black Skinny Pants & Pointed Flats)",
    "黃色衛衣 + 深灰色運動褲 + 復古慢跑鞋 (Yellow Sweatshirt, Charcoal Joggers & Retro Runners)",
)


class DonationTier(NamedTuple):
    amount: str
    label: str


# Shown on the donate view, in order
DONATION_TIERS: tuple[DonationTier, ...] = (
    DonationTier("NT$ 30", "一杯咖啡 (A cup of coffee)"),
    DonationTier("NT$ 150", "一份午餐 (A lunch)"),
    DonationTier("NT$ 500", "開發者的動力 (Fuel for the developers)"),
)


def draw_suggestion(rng: Optional[random.Random] = None) -> str:
    """Pick one suggestion uniformly at random."""
    return (rng or random).choice(SUGGESTIONS)
