"""
Curated ingredient reference data.

Three tiers:
- SAFE: generally recognised as safe and natural
- CAUTION: potentially concerning or misleadingly named
- HARMFUL: harmful, toxic, or highly processed

Keys are lowercase ingredient names as they appear on labels. A few
common OCR misspellings are listed alongside the correct spelling.
"""

SAFE_INGREDIENTS = {
    "organic": {
        "description": "Grown without synthetic pesticides or fertilizers",
        "alternatives": [],
    },
    "whole grain": {
        "description": "Contains all parts of the grain including the bran, germ, and endosperm",
        "alternatives": [],
    },
    "sprouted": {
        "description": "Seeds that have been germinated, increasing nutritional value and digestibility",
        "alternatives": [],
    },
    "raw": {
        "description": "Unprocessed and uncooked, retaining natural enzymes and nutrients",
        "alternatives": [],
    },
    "honey": {
        "description": "Natural sweetener produced by bees",
        "alternatives": [],
    },
    "maple syrup": {
        "description": "Natural sweetener made from the sap of maple trees",
        "alternatives": [],
    },
    "olive oil": {
        "description": "Oil extracted from olives, rich in monounsaturated fats",
        "alternatives": [],
    },
    "coconut oil": {
        "description": "Oil extracted from coconuts, contains medium-chain triglycerides",
        "alternatives": [],
    },
    "sea salt": {
        "description": "Salt produced from the evaporation of seawater, contains trace minerals",
        "alternatives": [],
    },
    "apple cider vinegar": {
        "description": "Fermented apple juice, contains beneficial bacteria and enzymes",
        "alternatives": [],
    },
    "niacin": {
        "description": "Vitamin B3, needed to turn food into energy and to keep skin, nerves and digestion healthy",
        "alternatives": [],
    },
    "thiamin mononitrate": {
        "description": "Synthetic vitamin B1, supports energy metabolism and nerve and heart function",
        "alternatives": [],
    },
    "thiamin mononitate": {
        "description": "Synthetic vitamin B1, supports energy metabolism and nerve and heart function",
        "alternatives": [],
    },
    "riboflavin": {
        "description": "Vitamin B2, supports energy production, cell function, skin and vision",
        "alternatives": [],
    },
    "folic acid": {
        "description": "Synthetic vitamin B9, needed for DNA synthesis and cell growth",
        "alternatives": [],
    },
    "cheese cultures": {
        "description": "Bacteria strains used in cheesemaking that develop flavor and texture and can support gut health",
        "alternatives": [],
    },
    "enzymes": {
        "description": "Processing enzymes used in cheese-making or baking, generally safe in the amounts used",
        "alternatives": [],
    },
    "milk": {
        "description": "Source of calcium, vitamin D and protein, generally beneficial in moderation",
        "alternatives": [],
    },
    "citric acid": {
        "description": "Compound found in citrus fruits, used as an acidity regulator and preservative",
        "alternatives": [],
    },
    "onion powder": {
        "description": "Dried onion seasoning with antioxidants, beneficial when used in moderation",
        "alternatives": [],
    },
    "garlic powder": {
        "description": "Dried garlic seasoning with antioxidants, beneficial when used in moderation",
        "alternatives": [],
    },
    "buttermilk": {
        "description": "Cultured dairy rich in probiotics, calcium and vitamins",
        "alternatives": [],
    },
    "soybean": {
        "description": "Nutrient-dense source of plant-based protein that supports heart health",
        "alternatives": [],
    },
    "cocoa powder": {
        "description": "Rich in antioxidants, although processing reduces the benefit",
        "alternatives": [],
    },
    "soy lecithin": {
        "description": "Emulsifier containing choline, which supports cell and brain health",
        "alternatives": [],
    },
    "baking soda": {
        "description": "Safe in small amounts, excessive use may upset the stomach or electrolyte balance",
        "alternatives": [],
    },
}

CAUTION_INGREDIENTS = {
    "natural flavors": {
        "description": "Can include a wide range of additives derived from natural sources but heavily processed",
        "alternatives": ["specific named flavors", "spices", "herbs"],
    },
    "natural flavor": {
        "description": "Can include a wide range of additives derived from natural sources but heavily processed",
        "alternatives": ["specific named flavors", "spices", "herbs"],
    },
    "wheat flour": {
        "description": "Processed flour that may be stripped of nutrients, not the same as whole grain wheat flour",
        "alternatives": ["whole grain wheat flour", "sprouted wheat flour"],
    },
    "wheat floor": {
        "description": "Refined wheat flour lacks the fiber of whole wheat and can cause blood sugar spikes",
        "alternatives": ["whole grain wheat flour"],
    },
    "enriched flour": {
        "description": "Refined flour with some nutrients added back in, still lacking many original nutrients",
        "alternatives": ["whole grain flour", "almond flour", "coconut flour"],
    },
    "brown sugar": {
        "description": "White sugar with molasses added for color and flavor, not significantly healthier",
        "alternatives": ["coconut sugar", "date sugar", "maple syrup"],
    },
    "evaporated cane juice": {
        "description": "Another name for sugar, chosen to sound healthier",
        "alternatives": ["honey", "maple syrup", "date sugar"],
    },
    "fruit juice concentrate": {
        "description": "Concentrated juice used as a sweetener, usually with fiber and nutrients removed",
        "alternatives": ["whole fruit", "fruit puree"],
    },
    "modified food starch": {
        "description": "Starch that has been chemically altered to change its properties",
        "alternatives": ["tapioca starch", "arrowroot powder"],
    },
    "soy protein isolate": {
        "description": "Highly processed soy product that may contain processing residues",
        "alternatives": ["whole soybeans", "tempeh", "minimally processed tofu"],
    },
    "whey protein concentrate": {
        "description": "Processed dairy product that may contain hormones if not from organic sources",
        "alternatives": ["organic whey protein", "plant-based proteins"],
    },
    "maltodextrin": {
        "description": "Highly processed carbohydrate used as a thickener or filler, can spike blood sugar",
        "alternatives": ["tapioca starch", "arrowroot powder"],
    },
    "ferrous sulfate": {
        "description": "Iron supplement that is generally safe but can cause stomach pain, constipation and nausea",
        "alternatives": [],
    },
    "vegetable oil": {
        "description": "Oils high in omega-6 fatty acids can promote inflammation when eaten in excess",
        "alternatives": ["olive oil", "avocado oil"],
    },
    "canola oil": {
        "description": "Low in saturated fat but heavily processed, which can introduce trans fats",
        "alternatives": ["olive oil", "avocado oil"],
    },
    "sunflower oil": {
        "description": "Contains healthy fats but its high omega-6 content can contribute to inflammation",
        "alternatives": ["olive oil"],
    },
    "palm oil": {
        "description": "Contains antioxidants but is high in saturated fat, which may raise cholesterol",
        "alternatives": ["olive oil", "avocado oil"],
    },
    "cheddar cheese": {
        "description": "Good source of calcium and protein but high in saturated fat and sodium",
        "alternatives": [],
    },
    "cheese seasoning": {
        "description": "Flavor blend that is often high in sodium and artificial additives",
        "alternatives": [],
    },
    "enriched cornmeal": {
        "description": "Provides added vitamins and minerals, but synthetic fortification is no substitute for whole foods",
        "alternatives": ["whole grain cornmeal"],
    },
    "corn meal": {
        "description": "Source of carbohydrates that lacks the fiber and nutrient density of whole grains",
        "alternatives": ["whole grain cornmeal"],
    },
    "corn": {
        "description": "Offers fiber and nutrients but can spike blood sugar, especially when processed",
        "alternatives": [],
    },
    "made from corn": {
        "description": "Corn-based ingredient whose value depends heavily on the level of processing",
        "alternatives": [],
    },
    "cornstarch": {
        "description": "Useful thickener but high in refined carbs and low in nutrients",
        "alternatives": ["arrowroot powder"],
    },
    "salt": {
        "description": "Essential for fluid balance and nerve transmission, but excess intake raises blood pressure",
        "alternatives": ["sea salt", "herbs", "spices"],
    },
    "sugar": {
        "description": "Quick energy source, but excess intake leads to weight gain, tooth decay and diabetes risk",
        "alternatives": ["whole fruit", "date sugar"],
    },
    "cane sugar": {
        "description": "Provides quick energy but no essential nutrients, contributes to chronic disease in excess",
        "alternatives": ["whole fruit", "date sugar"],
    },
    "artifical color": {
        "description": "Synthetic colors are allowed in regulated amounts but some are linked to hyperactivity in children",
        "alternatives": ["beet juice", "turmeric", "paprika"],
    },
    "red 40 lake": {
        "description": "Synthetic dye linked to behavioral issues in children and allergic reactions",
        "alternatives": ["beet juice", "paprika"],
    },
    "yellow 6 lake": {
        "description": "Synthetic dye linked to allergic reactions and hyperactivity in children",
        "alternatives": ["turmeric", "annatto"],
    },
    "yellow 6": {
        "description": "Synthetic dye linked to allergic reactions and hyperactivity in children",
        "alternatives": ["turmeric", "annatto"],
    },
    "yellow 5": {
        "description": "Tartrazine, a synthetic dye linked to allergic reactions and hyperactivity in children",
        "alternatives": ["turmeric", "saffron"],
    },
    "sodium diacetate": {
        "description": "Preservative and flavoring that is safe in regulated amounts, excess may cause irritation",
        "alternatives": ["vinegar"],
    },
    "disodium inosinate": {
        "description": "Flavor enhancer often paired with MSG, people with gout should limit it due to purines",
        "alternatives": ["herbs", "spices"],
    },
    "disodium guanylate": {
        "description": "Flavor enhancer often paired with MSG, may affect people sensitive to purines",
        "alternatives": ["herbs", "spices"],
    },
}

HARMFUL_INGREDIENTS = {
    "high fructose corn syrup": {
        "description": "Highly processed sweetener linked to obesity, diabetes, and other health issues",
        "alternatives": ["honey", "maple syrup", "coconut sugar"],
    },
    "partially hydrogenated oils": {
        "description": "Contains trans fats linked to heart disease and other health problems",
        "alternatives": ["olive oil", "avocado oil", "coconut oil"],
    },
    "monosodium glutamate": {
        "description": "Flavor enhancer that may cause adverse reactions in some people",
        "alternatives": ["sea salt", "herbs", "spices"],
    },
    "aspartame": {
        "description": "Artificial sweetener linked to numerous health concerns",
        "alternatives": ["stevia", "monk fruit extract", "erythritol"],
    },
    "sodium nitrite": {
        "description": "Preservative used in processed meats linked to cancer risk",
        "alternatives": ["celery powder", "salt-cured meats without additives"],
    },
    "butylated hydroxyanisole": {
        "description": "Synthetic antioxidant preservative (BHA) linked to cancer risk",
        "alternatives": ["vitamin e", "rosemary extract"],
    },
    "butylated hydroxytoluene": {
        "description": "Synthetic antioxidant preservative (BHT) linked to cancer risk",
        "alternatives": ["vitamin e", "rosemary extract"],
    },
    "propyl gallate": {
        "description": "Synthetic antioxidant preservative linked to cancer risk",
        "alternatives": ["vitamin e", "rosemary extract"],
    },
    "potassium bromate": {
        "description": "Flour additive linked to cancer, banned in many countries",
        "alternatives": ["unbromated flour"],
    },
    "azodicarbonamide": {
        "description": "Flour bleaching agent and dough conditioner linked to respiratory issues",
        "alternatives": ["unbleached flour"],
    },
    "carmine": {
        "description": "Red coloring made from crushed cochineal beetles, may cause allergic reactions",
        "alternatives": ["beet juice", "paprika", "berry juices"],
    },
    "yeast extract": {
        "description": "Often used to hide MSG, a chemical taste enhancer",
        "alternatives": ["nutritional yeast", "herbs", "spices"],
    },
    "artificial colors": {
        "description": "Synthetic dyes linked to behavioral problems and other health issues",
        "alternatives": ["natural colorings from vegetables, fruits, and spices"],
    },
    "artificial flavors": {
        "description": "Synthetic chemicals designed to mimic natural flavors",
        "alternatives": ["real food ingredients", "herbs", "spices"],
    },
    "sodium benzoate": {
        "description": "Preservative that can form benzene, a carcinogen, when combined with vitamin C",
        "alternatives": ["citric acid", "vitamin e"],
    },
}

MISLEADING_PRODUCTS = {
    "guacamole dip": {
        "description": "May contain little to no avocado, relying on hydrogenated oils and artificial colors instead",
        "real_ingredients": "Should contain primarily avocados, lime juice, salt, and spices",
    },
    "maple syrup": {
        "description": "'Maple-flavored syrup' often contains no real maple syrup, just corn syrup and artificial flavors",
        "real_ingredients": "Real maple syrup should have only one ingredient: maple syrup",
    },
    "blueberry": {
        "description": "Products advertising blueberries may contain 'blueberry bits' made from sugar, oil, and blue dye",
        "real_ingredients": "Should contain actual blueberries",
    },
    "whole grain": {
        "description": "'Made with whole grains' products may contain mostly refined flour",
        "real_ingredients": "Whole grain products should list a whole grain as the first ingredient",
    },
    "fruit juice": {
        "description": "May contain minimal actual fruit juice, the rest being water, sugar, and flavors",
        "real_ingredients": "100% fruit juice should contain only fruit juice, not added sugars",
    },
}

TIPS = [
    "The first 3 ingredients matter most - they make up the majority of the product.",
    "Long, chemical-sounding ingredients often indicate highly processed foods.",
    "Ingredients at the end of the list are present in very small amounts, even if they sound healthy.",
    "Organic certification helps avoid pesticides and other contaminants not listed on labels.",
    "Look for 'sprouted' or 'raw' ingredients for higher nutritional value.",
    "'Wheat flour' is not the same as 'whole grain wheat flour' - don't be fooled!",
    "Brown products aren't necessarily healthier (e.g., brown sugar vs. white sugar).",
    "Watch out for deceptively small serving sizes that mask high calories, sugar, or fat.",
]
