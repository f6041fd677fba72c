"""
Curated Niche Data

Static tables backing the niche normalizer and seed catalog:
- KNOWN_STORES: hand-picked high-ticket stores per canonical niche
- ALIASES: space-removed spellings that collapse onto one niche
- UMBRELLA_SYNONYMS: broad category words routed to a seeded niche
- POPULAR_NICHES: synonym lists for popular niches (seeded or not)
- KEYWORD_CLUSTERS: loose vocabulary patterns routed to a seeded niche
- RELATED_TERMS: per-niche variation clusters

Every niche these tables route to must be a KNOWN_STORES key.
"""

import re
from typing import Dict, List, Pattern, Tuple


DEFAULT_NICHE = "backyard"


# =============================================================================
# KNOWN STORES - (display name, domain) per canonical niche
# =============================================================================

KNOWN_STORES: Dict[str, List[Tuple[str, str]]] = {
    "backyard": [
        ("BBQGuys", "bbqguys.com"),
        ("Fire Pits Direct", "firepitsdirect.com"),
        ("Fire Pit Surplus", "firepitsurplus.com"),
        ("The Porch Swing Company", "theporchswingcompany.com"),
        ("All Things Barbecue", "allthingsbarbecue.com"),
    ],
    "fireplace": [
        ("Fireplaces Direct", "fireplacesdirect.com"),
        ("Electric Fireplaces Direct", "electricfireplacesdirect.com"),
        ("Starfire Direct", "starfiredirect.com"),
        ("US Fireplace Store", "usfireplacestore.com"),
        ("Electric Fireplaces Depot", "electricfireplacesdepot.com"),
    ],
    "wellness": [
        ("Recovery For Athletes", "recoveryforathletes.com"),
        ("My Sauna World", "mysaunaworld.com"),
        ("Northern Saunas", "northernsaunas.com"),
        ("Secret Saunas", "secretsaunas.com"),
        ("The Sauna Heater", "thesaunaheater.com"),
    ],
    "golf": [
        ("Shop Indoor Golf", "shopindoorgolf.com"),
        ("Rain or Shine Golf", "rainorshinegolf.com"),
        ("Carl's Golfland", "carlsgolfland.com"),
        ("Top Shelf Golf", "topshelfgolf.com"),
        ("Golf Simulators For Home", "golfsimulatorsforhome.com"),
    ],
    "fitness": [
        ("Strength Warehouse USA", "strengthwarehouseusa.com"),
        ("Fitness Factory", "fitnessfactory.com"),
        ("Fitness Zone", "fitnesszone.com"),
        ("Marcy Pro", "marcypro.com"),
        ("Global Fitness", "globalfitness.com"),
    ],
    "man cave": [
        ("Projector People", "projectorpeople.com"),
        ("4Seating", "4seating.com"),
        ("HTMarket", "htmarket.com"),
        ("Theater Seat Store", "theaterseatstore.com"),
        ("Upscale Audio", "upscaleaudio.com"),
    ],
    "kitchen": [
        ("AJ Madison", "ajmadison.com"),
        ("The Range Hood Store", "therangehoodstore.com"),
        ("Premium Home Source", "premiumhomesource.com"),
        ("Seattle Coffee Gear", "seattlecoffeegear.com"),
        ("Majesty Coffee", "majestycoffee.com"),
    ],
    "hvac": [
        ("Heat & Cool", "heatandcool.com"),
        ("Alpine Home Air", "alpinehomeair.com"),
        ("Total Home Supply", "totalhomesupply.com"),
        ("AC Wholesalers", "acwholesalers.com"),
        ("HVACQuick", "hvacquick.com"),
    ],
    "safes": [
        ("Dean Safe", "deansafe.com"),
        ("The Safe Keeper", "thesafekeeper.com"),
        ("NW Safe", "nwsafe.com"),
        ("Safe & Vault Store", "safeandvaultstore.com"),
        ("Liberty Safe", "libertysafe.com"),
    ],
    "solar": [
        ("Shop Solar Kits", "shopsolarkits.com"),
        ("GoGreenSolar", "gogreensolar.com"),
        ("Wholesale Solar", "wholesalesolar.com"),
        ("Mr. Solar", "mrsolar.com"),
        ("Solar Power Supply", "solarpowersupply.com"),
    ],
    "drones": [
        ("Dronefly", "dronefly.com"),
        ("Advexure", "advexure.com"),
        ("Maverick Drone", "maverickdrone.com"),
        ("Drone Nerds", "dronenerds.com"),
        ("Buy Drones Online", "buydronesonline.com"),
    ],
    "generators": [
        ("Generator Mart", "generatormart.com"),
        ("Electric Generators Direct", "electricgeneratorsdirect.com"),
        ("Generator Supercenter", "generatorsupercenter.com"),
        ("Norwall", "norwall.com"),
        ("AP Electric", "apelectric.com"),
    ],
    "horse riding": [
        ("Dover Saddlery", "doversaddlery.com"),
        ("SmartPak", "smartpakequine.com"),
        ("Chicks Saddlery", "chicksaddlery.com"),
        ("HorseLoverZ", "horseloverz.com"),
        ("State Line Tack", "statelinetack.com"),
    ],
    "sauna": [
        ("The Sauna Place", "saunaplace.com"),
        ("The Blissful Place", "theblissfulplace.com"),
        ("Sauna King", "saunaking.com"),
        ("Almost Heaven Saunas", "almostheaven.com"),
        ("Finnleo", "finnleo.com"),
    ],
    "pizza oven": [
        ("Pizza Ovens", "pizzaovens.com"),
        ("Patio & Pizza", "patioandpizza.com"),
        ("The Pizza Oven Shop", "thepizzaovenshop.com"),
        ("WPPO", "wppo.com"),
        ("Pizza Equipment Pros", "pizzaequipmentpros.com"),
    ],
    "exercise equipment": [
        ("Global Fitness", "globalfitness.com"),
        ("Fitness Factory", "fitnessfactory.com"),
        ("Gym Source", "gymsource.com"),
        ("Marcy Pro", "marcypro.com"),
        ("IRON COMPANY", "ironcompany.com"),
    ],
    "garage": [
        ("Garage Flooring LLC", "garageflooringllc.com"),
        ("StoreYourBoard", "storeyourboard.com"),
        ("Flow Wall", "flowwall.com"),
        ("NewAge Products", "newageproducts.com"),
        ("Wall Control", "wallcontrol.com"),
    ],
    "marine": [
        ("Wholesale Marine", "wholesalemarine.com"),
        ("iBoats", "iboats.com"),
        ("Marine Parts Source", "marinepartssource.com"),
        ("Boat Lift Warehouse", "boatliftwarehouse.com"),
        ("Great Lakes Skipper", "greatlakesskipper.com"),
    ],
    "smart home": [
        ("Home Controls", "homecontrols.com"),
        ("Aartech Canada", "aartech.ca"),
        ("Automated Outlet", "automatedoutlet.com"),
        ("The Smartest House", "thesmartesthouse.com"),
        ("Matter Shop", "matter-smarthome.org"),
    ],
}


# =============================================================================
# ALIASES - keyed by the space-removed normalized form
# =============================================================================

# Targets must normalize to themselves.
ALIASES: Dict[str, str] = {
    "hometheater": "man cave",
    "hometheatre": "man cave",
    "hometheaters": "man cave",
    "mancave": "man cave",
    "mancaves": "man cave",
    "horseriding": "horse riding",
    "pizzaoven": "pizza oven",
    "pizzaovens": "pizza oven",
    "exerciseequipment": "exercise equipment",
    "smarthome": "smart home",
    "smarthomes": "smart home",
    "homegym": "fitness",
}


# =============================================================================
# UMBRELLA SYNONYMS - broad category words
# =============================================================================

UMBRELLA_SYNONYMS: Dict[str, str] = {
    # Automotive
    "automotive": "garage",
    "auto": "garage",
    "car": "garage",
    "vehicle": "garage",
    "truck": "garage",
    "workshop": "garage",
    "car care": "garage",
    "auto parts": "garage",
    # Fitness
    "gym": "fitness",
    "workout": "fitness",
    "strength training": "fitness",
    "weightlifting": "fitness",
    # Outdoor living
    "outdoor living": "backyard",
    "patio": "backyard",
    "grilling": "backyard",
    # Water
    "boat": "marine",
    "boating": "marine",
    "yacht": "marine",
    # Equestrian
    "equestrian": "horse riding",
    "equine": "horse riding",
    # Home tech
    "home automation": "smart home",
    "home cinema": "man cave",
    # Energy
    "off grid": "solar",
    "backup power": "generators",
}


# =============================================================================
# POPULAR NICHES - synonym lists; only seeded niches are routable
# =============================================================================

POPULAR_NICHES: Dict[str, List[str]] = {
    "backyard": ["outdoor living", "patio furniture", "fire pits", "firepit", "bbq grills", "outdoor kitchen"],
    "wellness": ["recovery", "cold plunge", "red light therapy", "massage chairs", "biohacking"],
    "horse riding": ["horseback riding", "saddlery", "equestrian gear", "horse tack"],
    "marine": ["boating", "boat parts", "boat accessories", "marine electronics", "sailing"],
    "smart home": ["home automation", "connected home", "smart devices", "smart lighting"],
    "garage": ["garage storage", "garage flooring", "car lifts", "tool storage", "automotive"],
    "man cave": ["home theater", "game room", "media room", "home bar", "basement bar"],
    "fitness": ["home gym", "gym equipment", "strength equipment", "weightlifting"],
    "drones": ["drone", "quadcopter", "quadcopters", "uav", "fpv", "aerial photography"],
    "golf": ["golf simulators", "indoor golf", "putting greens", "golf equipment"],
    "kitchen": ["kitchen appliances", "espresso machines", "coffee equipment", "cookware"],
    "fireplace": ["electric fireplaces", "gas fireplaces", "wood stoves", "fireplace inserts"],
    "sauna": ["saunas", "infrared sauna", "barrel sauna", "steam room"],
    "solar": ["solar panels", "solar power", "solar kits", "off grid power"],
    "generators": ["generator", "standby generators", "portable generators", "home backup power"],
    "hvac": ["air conditioning", "heat pumps", "mini splits", "furnaces"],
    "safes": ["safe", "gun safes", "home safes", "vaults"],
    "pizza oven": ["outdoor oven", "wood fired oven", "pizza ovens", "brick oven"],
    "exercise equipment": ["treadmills", "ellipticals", "rowing machines", "exercise machines"],
    # Popular niches without seed data (never routed to directly)
    "outdoor": ["camping", "hiking", "adventure", "overlanding"],
    "jewelry": ["jewellery", "rings", "necklaces", "fine jewelry"],
    "watches": ["luxury watches", "timepieces", "wristwatches"],
    "pets": ["pet supplies", "dog beds", "cat furniture"],
}


# =============================================================================
# KEYWORD CLUSTERS - loose vocabulary, checked in order
# =============================================================================

# Specific clusters come before broad ones ("outdoor pizza" -> pizza oven).
KEYWORD_CLUSTERS: List[Tuple[Pattern, str]] = [
    (re.compile(r"pizza|wood ?fired|brick oven"), "pizza oven"),
    (re.compile(r"sauna|steam room"), "sauna"),
    (re.compile(r"fireplace|hearth|wood ?stove|chimney|mantel"), "fireplace"),
    (re.compile(r"drone|quadcopter|\buav\b|\bfpv\b|multirotor"), "drones"),
    (re.compile(r"golf|putting green"), "golf"),
    (re.compile(r"horse|equestrian|equine|saddle|\btack\b"), "horse riding"),
    (re.compile(r"theat(?:er|re)|projector|cinema|game ?room|man ?cave|media room"), "man cave"),
    (re.compile(r"treadmill|elliptical|rowing machine|exercise"), "exercise equipment"),
    (re.compile(r"\bgym\b|workout|barbell|dumbbell|kettlebell|weightlift"), "fitness"),
    (re.compile(r"kitchen|cookware|espresso|coffee|culinary|range hood"), "kitchen"),
    (re.compile(r"\bhvac\b|air condition|heat pump|furnace|mini ?split"), "hvac"),
    (re.compile(r"\bsafes?\b|\bvaults?\b"), "safes"),
    (re.compile(r"solar|photovoltaic|off ?grid"), "solar"),
    (re.compile(r"generator|standby power"), "generators"),
    (re.compile(r"garage|automotive|\bcars?\b|\btrucks?\b|car lift"), "garage"),
    (re.compile(r"\bboats?\b|marine|yacht|kayak|nautical|sailing"), "marine"),
    (re.compile(r"smart|automation|\biot\b"), "smart home"),
    (re.compile(r"recovery|massage|cold plunge|red light|wellness"), "wellness"),
    (re.compile(r"garden|yard|patio|lawn|\bdeck\b|landscap|\bgrills?\b|\bbbq\b|barbecue|fire ?pit"), "backyard"),
]


# =============================================================================
# RELATED TERMS - variation clusters per canonical niche
# =============================================================================

RELATED_TERMS: Dict[str, List[str]] = {
    "backyard": ["patio", "garden", "yard", "lawn", "deck", "landscape"],
    "pizza oven": ["outdoor oven", "wood fired oven", "pizza", "oven", "outdoor cooking", "backyard cooking"],
    "drones": ["uav", "quadcopter", "aerial", "drone photography", "fpv", "rc drone", "quad", "quads", "multirotor"],
    "kitchen": ["culinary", "cooking", "chef", "cookware", "kitchen equipment", "appliances"],
    "golf": ["golfing", "golf equipment", "golf gear", "golf clubs", "golf accessories"],
    "fitness": ["gym", "workout", "exercise", "training", "bodybuilding", "strength"],
    "exercise equipment": ["fitness", "gym", "workout", "treadmill", "home gym"],
    "marine": ["boat", "nautical", "sailing", "maritime"],
    "horse riding": ["equestrian", "equine", "horse", "riding", "horses", "saddlery"],
    "wellness": ["health", "wellbeing", "recovery", "therapy", "spa"],
    "sauna": ["wellness", "steam", "infrared", "heat"],
    "smart home": ["home automation", "iot", "connected home"],
    "garage": ["automotive", "workshop", "storage"],
    "man cave": ["mancave", "den", "entertainment", "game room", "home theater", "basement"],
    "fireplace": ["hearth", "fire", "stove", "mantel"],
    "hvac": ["heating", "cooling", "air conditioning", "heat pump"],
    "safes": ["safe", "vault", "security"],
    "solar": ["solar power", "solar panel", "off grid", "renewable"],
    "generators": ["generator", "backup power", "standby power"],
}
