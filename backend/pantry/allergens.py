"""
Allergen detection for recipe ingredients, based on the Japanese food
labeling allergen list. Substring lookup against a fixed ingredient map.
"""
import logging
from typing import Dict, Iterable, List, Optional

from pantry.models.allergy import AllergyCheck, Severity, UserAllergy

logger = logging.getLogger(__name__)

COMMON_ALLERGENS = [
    "卵",
    "乳",
    "小麦",
    "そば",
    "落花生",
    "えび",
    "かに",
    "大豆",
    "魚",
    "肉",
    "ナッツ類",
    "ごま",
    "貝類",
]

INGREDIENT_ALLERGEN_MAP: Dict[str, List[str]] = {
    # 卵
    "卵": ["卵"], "たまご": ["卵"], "玉子": ["卵"], "鶏卵": ["卵"], "マヨネーズ": ["卵"],
    # 乳
    "牛乳": ["乳"], "ミルク": ["乳"], "チーズ": ["乳"], "バター": ["乳"],
    "ヨーグルト": ["乳"], "クリーム": ["乳"],
    # 小麦
    "小麦": ["小麦"], "小麦粉": ["小麦"], "パン": ["小麦"], "うどん": ["小麦"],
    "ラーメン": ["小麦"], "パスタ": ["小麦"], "スパゲッティ": ["小麦"],
    "醤油": ["小麦", "大豆"], "味噌": ["大豆"],
    # そば
    "そば": ["そば"], "蕎麦": ["そば"],
    # 落花生
    "落花生": ["落花生"], "ピーナッツ": ["落花生"],
    # えび
    "えび": ["えび"], "海老": ["えび"], "エビ": ["えび"], "シュリンプ": ["えび"],
    # かに
    "かに": ["かに"], "蟹": ["かに"], "カニ": ["かに"], "クラブ": ["かに"],
    # 大豆
    "大豆": ["大豆"], "豆腐": ["大豆"], "納豆": ["大豆"], "豆乳": ["大豆"], "もやし": ["大豆"],
    # 魚
    "魚": ["魚"], "さかな": ["魚"], "サーモン": ["魚"], "まぐろ": ["魚"],
    "さば": ["魚"], "いわし": ["魚"], "あじ": ["魚"],
    # ナッツ類
    "アーモンド": ["ナッツ類"], "クルミ": ["ナッツ類"], "カシューナッツ": ["ナッツ類"], "ピスタチオ": ["ナッツ類"],
    # ごま
    "ごま": ["ごま"], "胡麻": ["ごま"], "セサミ": ["ごま"],
    # 貝類
    "あさり": ["貝類"], "はまぐり": ["貝類"], "しじみ": ["貝類"], "ホタテ": ["貝類"],
    "カキ": ["貝類"], "牡蠣": ["貝類"],
}


def detect_allergens(ingredient_name: str) -> List[str]:
    """Allergens whose trigger ingredient appears in the name, in map order."""
    lower = (ingredient_name or "").lower()
    found: List[str] = []
    for ingredient, allergens in INGREDIENT_ALLERGEN_MAP.items():
        if ingredient.lower() in lower:
            for allergen in allergens:
                if allergen not in found:
                    found.append(allergen)
    return found


def check_user_allergens(ingredients: Iterable[str], user_allergies: Iterable[UserAllergy]) -> AllergyCheck:
    """Conflicts between a recipe's ingredients and the user's allergies, with the worst severity."""
    severity_by_allergen = {}
    for allergy in user_allergies:
        current = severity_by_allergen.get(allergy.allergen)
        if current is None or allergy.severity.level > current.level:
            severity_by_allergen[allergy.allergen] = allergy.severity

    conflicting: List[str] = []
    max_severity: Optional[Severity] = None
    for ingredient in ingredients:
        for allergen in detect_allergens(ingredient):
            severity = severity_by_allergen.get(allergen)
            if severity is None:
                continue
            if allergen not in conflicting:
                conflicting.append(allergen)
            if max_severity is None or severity.level > max_severity.level:
                max_severity = severity

    if conflicting:
        logger.info("ALLERGY_CHECK conflicts=%s max_severity=%s", conflicting, max_severity.value)
    return AllergyCheck(
        has_allergens=bool(conflicting),
        conflicting_allergens=conflicting,
        max_severity=max_severity,
    )
