"""Built-in recipe table with precomputed nutrition facts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecipeRecord:
    """A known dish with nutrition facts and search keywords."""

    name: str
    keywords: tuple[str, ...]
    calories: float
    protein: str
    carbs: str
    fat: str
    tags: tuple[str, ...]
    health_score: int
    default_feedback: str


DEFAULT_RECIPES: tuple[RecipeRecord, ...] = (
    RecipeRecord(
        name="番茄炒蛋",
        keywords=("番茄", "西红柿", "炒蛋", "鸡蛋"),
        calories=220,
        protein="14g",
        carbs="10g",
        fat="16g",
        tags=("家常菜", "国民菜", "高蛋白"),
        health_score=88,
        default_feedback="经典的国民下饭菜，酸甜开胃，蛋白质和维生素都不错哦！",
    ),
    RecipeRecord(
        name="水煮鸡胸肉",
        keywords=("鸡胸", "水煮", "减肥"),
        calories=165,
        protein="31g",
        carbs="0g",
        fat="3.6g",
        tags=("减脂", "高蛋白", "低碳"),
        health_score=95,
        default_feedback="减脂期的黄金搭档，蛋白质满满，记得多喝水帮助代谢哦。",
    ),
    RecipeRecord(
        name="宫保鸡丁",
        keywords=("宫保", "鸡丁", "花生"),
        calories=320,
        protein="22g",
        carbs="14g",
        fat="20g",
        tags=("川菜", "下饭", "微辣"),
        health_score=75,
        default_feedback="鸡肉提供了优质蛋白，不过酱汁热量略高，配饭要控制量哦。",
    ),
    RecipeRecord(
        name="清炒时蔬",
        keywords=("青菜", "菠菜", "油麦菜", "炒青菜", "素菜"),
        calories=80,
        protein="2g",
        carbs="5g",
        fat="6g",
        tags=("高纤维", "维生素", "清淡"),
        health_score=92,
        default_feedback="补充膳食纤维的好选择，肠道会感谢你的！",
    ),
    RecipeRecord(
        name="红烧牛肉面",
        keywords=("牛肉面", "面条", "红烧"),
        calories=550,
        protein="25g",
        carbs="75g",
        fat="18g",
        tags=("碳水满足", "暖胃", "主食"),
        health_score=65,
        default_feedback="热腾腾的很满足，但碳水和钠含量较高，建议下一餐多吃点蔬菜平衡一下。",
    ),
    RecipeRecord(
        name="鲜肉水饺 (10个)",
        keywords=("饺子", "水饺"),
        calories=450,
        protein="18g",
        carbs="50g",
        fat="20g",
        tags=("传统美食", "碳水+蛋白"),
        health_score=70,
        default_feedback="好吃不过饺子！注意蘸料里的油和盐不要太多哦。",
    ),
    RecipeRecord(
        name="燕麦牛奶粥",
        keywords=("燕麦", "牛奶", "早饭", "粥"),
        calories=280,
        protein="12g",
        carbs="35g",
        fat="8g",
        tags=("低GI", "早餐", "膳食纤维"),
        health_score=90,
        default_feedback="非常健康的早餐选择！低GI碳水能提供持久的饱腹感。",
    ),
    RecipeRecord(
        name="麻辣烫 (含肉菜)",
        keywords=("麻辣烫", "冒菜"),
        calories=600,
        protein="20g",
        carbs="40g",
        fat="45g",
        tags=("重口味", "高油高盐"),
        health_score=40,
        default_feedback="虽然解馋，但油脂和盐分很容易超标，汤尽量少喝哦，多喝水！",
    ),
    RecipeRecord(
        name="蔬菜沙拉 (低脂酱)",
        keywords=("沙拉", "轻食", "草"),
        calories=150,
        protein="5g",
        carbs="12g",
        fat="8g",
        tags=("轻食", "维生素", "减脂"),
        health_score=92,
        default_feedback="清爽无负担，感觉身体都变轻盈了呢！",
    ),
    RecipeRecord(
        name="米饭 (一碗)",
        keywords=("米饭", "白饭"),
        calories=220,
        protein="4g",
        carbs="48g",
        fat="0.5g",
        tags=("主食", "精制碳水"),
        health_score=60,
        default_feedback="基础能量来源，如果能换成杂粮饭就更完美啦。",
    ),
)
