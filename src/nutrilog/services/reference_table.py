"""Bundled offline reference table of common foods.

Values are approximations for the stated serving, covering South Indian,
Thai convenience-store and common Western dishes.
"""

from nutrilog.domain.nutrition import FoodSource, NutrientRecord


def _food(  # noqa: PLR0913
    name: str,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    fiber: float,
    serving_size: str,
    brand: str | None = None,
) -> NutrientRecord:
    return NutrientRecord(
        name=name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        serving_size=serving_size,
        source=FoodSource.LOCAL,
        brand=brand,
    )


REFERENCE_FOODS: dict[str, NutrientRecord] = {
    # South Indian Gravies & Kolambu
    "vatha kuzhambu": _food("Vatha Kuzhambu", 150, 2, 18, 8, 2, "1/2 cup"),
    "kara kuzhambu": _food("Kara Kuzhambu", 140, 2, 16, 7, 3, "1/2 cup"),
    "more kuzhambu": _food("More Kuzhambu", 110, 4, 8, 7, 0.5, "1/2 cup"),
    "sambar": _food("Sambar", 120, 4, 14, 5, 3, "1 bowl (200g)"),
    "drumstick sambar": _food("Drumstick Sambar", 115, 4.5, 13, 5, 3.5, "1 bowl"),
    "rasam": _food("Rasam", 40, 1, 8, 1, 0.5, "1 bowl"),
    "dal": _food("Dal Fry", 160, 8, 20, 5, 6, "1 bowl"),
    "spinach dal": _food("Keerai Masiyal (Spinach Dal)", 140, 7, 12, 4, 5, "1 cup"),
    "avial": _food("Avial (Mixed Veg)", 180, 3, 15, 12, 5, "1 cup"),
    "fish curry": _food("Meen Kuzhambu (Fish Curry)", 220, 25, 8, 10, 2, "1 cup"),
    "pondy fish curry": _food("Pondicherry Fish Curry", 240, 24, 10, 12, 2, "1 cup"),
    "chicken chettinad": _food("Chettinad Chicken Gravy", 290, 28, 8, 16, 2, "1 cup"),

    # Sides (Poriyal/Kootu/Usili)
    "poriyal": _food("Veg Poriyal (Coconut)", 110, 3, 12, 6, 4, "1/2 cup"),
    "cabbage poriyal": _food("Cabbage Poriyal", 85, 2, 10, 4, 3, "1/2 cup"),
    "beetroot poriyal": _food("Beetroot Poriyal", 95, 2, 14, 4, 3.5, "1/2 cup"),
    "kootu": _food("Veg Kootu", 130, 6, 14, 5, 4, "1 cup"),
    "snake gourd kootu": _food(
        "Snake Gourd (Pudalangai) Kootu", 110, 5, 12, 4, 3, "1 cup"
    ),
    "beans usili": _food("Beans Paruppu Usili", 180, 9, 18, 8, 6, "1/2 cup"),
    "vazhaipoo usili": _food("Banana Flower Usili", 160, 7, 20, 7, 8, "1/2 cup"),
    "egg poriyal": _food("Egg Poriyal", 160, 12, 2, 11, 0, "2 eggs"),

    # Rice & Tiffins
    "white rice": _food("White Rice (Cooked)", 205, 4, 45, 0.5, 0.6, "1 cup (158g)"),
    "brown rice": _food("Brown Rice (Cooked)", 216, 5, 45, 1.8, 3.5, "1 cup"),
    "millet rice": _food("Millet Rice (Samai/Thinai)", 180, 6, 38, 1.5, 5, "1 cup"),
    "curd rice": _food("Curd Rice", 280, 7, 40, 10, 1, "1 cup"),
    "lemon rice": _food("Lemon Rice", 320, 5, 48, 12, 2, "1 cup"),
    "chicken biryani": _food("Chicken Biryani", 360, 18, 45, 12, 3, "1 cup (200g)"),
    "veg biryani": _food("Vegetable Biryani", 280, 6, 45, 9, 4, "1 cup"),
    "chapati": _food("Chapati", 104, 3, 18, 2.5, 2, "1 piece (6 inch)"),
    "veg kurma": _food("Vegetable Kurma", 190, 5, 18, 11, 4, "1 cup"),
    "idli": _food("Idli", 39, 2, 8, 0.2, 0.2, "1 piece (30g)"),
    "dosa": _food("Plain Dosa", 133, 3.8, 23, 3.5, 0.8, "1 medium"),
    "masala dosa": _food("Masala Dosa", 350, 6, 45, 16, 3, "1 medium"),
    "vada": _food("Medu Vada", 97, 2.5, 10, 5.5, 1.2, "1 piece"),
    "upma": _food("Rava Upma", 250, 5, 38, 8, 2.5, "1 cup"),
    "pongal": _food("Ven Pongal", 310, 8, 42, 13, 3, "1 cup"),
    "poori": _food("Poori", 140, 3, 18, 6, 1, "1 piece"),

    # Breads & Cereals
    "wheat bread": _food("Whole Wheat Bread", 160, 8, 28, 2, 4, "2 slices"),
    "multigrain bread": _food("Multigrain Bread", 180, 9, 30, 3, 5, "2 slices"),
    "quinoa bread": _food("Quinoa Bread", 90, 4, 15, 1.5, 2, "1 slice"),
    "corn flakes": _food(
        "Corn Flakes (Kellogg's)", 100, 2, 24, 0, 1, "1 cup (30g)", brand="Kellogg's"
    ),
    "muesli": _food("Muesli (Fruit & Nut)", 180, 5, 32, 4, 4, "1/2 cup"),
    "granola": _food("Granola", 220, 6, 35, 8, 4, "1/2 cup"),
    "oats": _food("Oatmeal (Cooked)", 150, 5, 27, 3, 4, "1 cup"),

    # Fruits
    "papaya": _food("Papaya", 43, 0.5, 11, 0.3, 1.7, "100g (1 cup cubes)"),
    "watermelon": _food("Watermelon", 30, 0.6, 8, 0.2, 0.4, "100g (1 cup cubes)"),
    "mango": _food("Mango", 60, 0.8, 15, 0.4, 1.6, "100g"),
    "banana": _food("Banana", 89, 1.1, 23, 0.3, 2.6, "1 medium (100g)"),
    "apple": _food("Apple", 52, 0.3, 14, 0.2, 2.4, "1 medium (100g)"),
    "guava": _food("Guava", 68, 2.6, 14, 1, 5.4, "1 medium (100g)"),
    "pomegranate": _food("Pomegranate", 83, 1.7, 19, 1.2, 4, "1/2 cup arils"),
    "sapota": _food("Sapota (Chikoo)", 83, 0.4, 20, 1.1, 5.3, "1 fruit"),
    "jackfruit": _food("Jackfruit", 95, 1.7, 23, 0.6, 1.5, "100g"),
    "orange": _food("Orange", 47, 0.9, 12, 0.1, 2.4, "1 medium"),
    "grapes": _food("Grapes", 67, 0.6, 17, 0.4, 0.9, "1 cup"),
    "pineapple": _food("Pineapple", 50, 0.5, 13, 0.1, 1.4, "1 cup chunks"),
    "muskmelon": _food("Muskmelon (Cantaloupe)", 34, 0.8, 8, 0.2, 0.9, "100g"),
    "strawberry": _food("Strawberry", 32, 0.7, 7.7, 0.3, 2, "1 cup"),

    # Salads & Dressings
    "salad": _food("Green Salad (No Dressing)", 25, 1, 5, 0, 2, "1 bowl"),
    "ranch": _food("Ranch Dressing", 130, 0, 2, 13, 0, "2 tbsp"),
    "italian dressing": _food("Italian Dressing", 80, 0, 3, 8, 0, "2 tbsp"),
    "olive oil": _food("Olive Oil", 120, 0, 0, 14, 0, "1 tbsp"),
    "vinaigrette": _food("Balsamic Vinaigrette", 45, 0, 3, 4, 0, "1 tbsp"),

    # Thailand 7-11 & Snacks & Tops Market
    "toastie ham cheese": _food(
        "Ham & Cheese Toastie (7-11)", 290, 9, 33, 13, 1, "1 sandwich", brand="7-Select"
    ),
    "toastie sausage cheese": _food(
        "Sausage & Cheese Toastie (7-11)",
        320,
        11,
        32,
        16,
        1,
        "1 sandwich",
        brand="7-Select",
    ),
    "cp chicken breast garlic": _food(
        "CP Chicken Breast (Garlic Pepper)",
        90,
        17,
        2,
        1.5,
        0,
        "1 pack (90g)",
        brand="CP",
    ),
    "cp chicken breast chili": _food(
        "CP Chicken Breast (Chili)", 90, 17, 2, 1.5, 0, "1 pack (90g)", brand="CP"
    ),
    "burger sticky rice": _food(
        "Sticky Rice Burger (Pork)", 240, 7, 42, 5, 1, "1 burger", brand="7-Select"
    ),
    "onigiri salmon": _food(
        "Salmon Onigiri", 170, 5, 33, 2, 0, "1 piece", brand="Ezygo"
    ),
    "onigiri tuna": _food(
        "Tuna Mayo Onigiri", 190, 5, 32, 5, 0, "1 piece", brand="Ezygo"
    ),
    "basil pork rice": _food(
        "Basil Pork with Rice (Kaprao Moo)", 450, 18, 65, 14, 2, "1 box", brand="Ezygo"
    ),
    "shrimp fried rice": _food(
        "Shrimp Fried Rice", 380, 12, 55, 11, 2, "1 box", brand="Ezygo"
    ),
    "mama tom yum": _food(
        "Mama Noodles (Creamy Tom Yum)", 260, 5, 38, 11, 1, "1 pack (60g)", brand="Mama"
    ),
    "jok": _food("Jok (Instant Porridge)", 130, 4, 26, 1, 0, "1 cup"),
    "betagen": _food(
        "Betagen Fermented Milk", 100, 2, 22, 0, 0, "1 bottle (140ml)", brand="Betagen"
    ),
    "meiji milk": _food(
        "Meiji Flavored Milk", 160, 6, 22, 5, 0, "1 bottle (200ml)", brand="Meiji"
    ),
    "jele beautie": _food("Jele Beautie Jelly", 30, 0, 7, 0, 1, "1 pack", brand="Jele"),
    "c-vitt": _food("C-Vitt Vitamin C Drink", 35, 0, 9, 0, 0, "1 bottle"),
    "bento squid": _food(
        "Bento Squid Snack (Red)", 20, 3, 2, 0, 0, "1 pack (6g)", brand="Bento"
    ),
    "tao kae noi": _food(
        "Tao Kae Noi Seaweed", 20, 1, 1, 1.5, 0.5, "1 small pack", brand="Tao Kae Noi"
    ),
    "koh kae": _food(
        "Koh Kae Peanuts (Coconut)", 160, 6, 12, 10, 2, "1 pack (30g)", brand="Koh Kae"
    ),
    "lays nori": _food(
        "Lay's Nori Seaweed", 160, 2, 15, 10, 1, "1 serving (30g)", brand="Lay's"
    ),
    "lays squid": _food(
        "Lay's Hot Chili Squid", 160, 2, 15, 10, 1, "1 serving (30g)", brand="Lay's"
    ),
    "pocky choco banana": _food(
        "Pocky Choco Banana", 110, 2, 18, 4, 1, "1 box (25g)", brand="Glico"
    ),
    "pretz larb": _food(
        "Pretz Larb Flavor", 120, 3, 17, 4, 1, "1 box (25g)", brand="Glico"
    ),

    # Thai & Western
    "pad thai": _food("Pad Thai", 400, 15, 55, 14, 3, "1 cup"),
    "green curry": _food("Thai Green Curry (Chicken)", 320, 18, 12, 22, 2, "1 cup"),
    "tom yum": _food("Tom Yum Soup", 90, 8, 10, 3, 1, "1 bowl"),
    "chicken breast": _food("Grilled Chicken Breast", 165, 31, 0, 3.6, 0, "100g"),
    "egg": _food("Boiled Egg", 72, 6.3, 0.6, 5, 0, "1 large"),
    "pizza": _food("Pizza Slice (Cheese)", 285, 12, 36, 10, 2, "1 slice"),
    "burger": _food("Cheeseburger", 350, 18, 35, 16, 2, "1 medium"),
    "pasta": _food("Pasta (Tomato Sauce)", 250, 8, 45, 4, 3, "1 cup"),
    "protein shake": _food("Whey Protein Shake", 120, 24, 3, 1, 0, "1 scoop in water"),
    "coffee": _food("Black Coffee", 2, 0.3, 0, 0, 0, "1 cup"),
    "latte": _food("Cafe Latte", 190, 12, 18, 9, 0, "1 cup (Whole Milk)"),
}


def normalize_query(query: str) -> str:
    """Normalize a search query for matching against reference keys."""
    return query.strip().lower()


def match_reference(
    query: str, table: dict[str, NutrientRecord] | None = None
) -> list[NutrientRecord]:
    """Return entries whose key contains the query or is contained in it."""
    normalized = normalize_query(query)
    if not normalized:
        return []
    foods = REFERENCE_FOODS if table is None else table
    return [
        record
        for key, record in foods.items()
        if key in normalized or normalized in key
    ]
