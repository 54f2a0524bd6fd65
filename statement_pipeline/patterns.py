"""Keyword and category tables for the built-in heuristics.

Every table is plain ordered data; order is significant because the first
matching entry wins. Patterns are uppercase substrings, except that a pattern
containing ``.*`` is evaluated as a case-insensitive regular expression.
"""

import re
from functools import lru_cache

TRANSFER_PATTERNS = [
    "TRANSFER",
    "XFER",
    "TO SAVINGS",
    "TO CHECKING",
    "INTERNAL TRANSFER",
    "VENMO CASHOUT",
    "VENMO *CASHOUT",
    "CASH APP CASH OUT",
    "PAYPAL TRANSFER",
    "ZELLE TRANSFER",
    "APPLE CASH TRANSFER",
    "BROKERAGE TRANSFER",
]

CC_PAYMENT_PATTERNS = [
    "AUTOPAY",
    "AUTO PAY",
    "CREDIT CARD PAYMENT",
    "CARD PAYMENT",
    "PAYMENT THANK YOU",
    "THANK YOU PAYMENT",
    "ONLINE PAYMENT.*CHASE",
    "ONLINE PAYMENT.*AMEX",
    "ONLINE PAYMENT.*CITI",
    "ONLINE PAYMENT.*CAPITAL ONE",
    "ONLINE PAYMENT.*DISCOVER",
    "BILL PAY.*CHASE",
    "BILL PAY.*AMEX",
    "BILL PAY.*CITI",
]

CASH_WITHDRAWAL_PATTERNS = ["ATM", "CASH WITHDRAWAL", "WITHDRAWAL", "CASH ADVANCE"]

REFUND_PATTERNS = [
    "REFUND",
    "RETURN",
    "REVERSAL",
    "CHARGEBACK",
    "REVERSAL OF",
    "*REFUND",
    "CREDIT",
    "CR ADJ",
    "ADJUSTMENT CR",
    "REBATE",
]

FEE_INTEREST_PATTERNS = [
    "FEE",
    "MONTHLY SERVICE",
    "MAINTENANCE FEE",
    "INTEREST CHARGE",
    "FINANCE CHARGE",
    "LATE FEE",
    "OVERDRAFT",
]

INCOME_PATTERNS = [
    "PAYROLL",
    "DIRECT DEP",
    "DIRECT DEPOSIT",
    "ADP PAYROLL",
    "PAYCHEX",
    "GUSTO",
    "TAX REFUND",
    "IRS TREAS",
]

CATEGORY_PATTERNS = {
    "Auto & Transport": [
        "SHELL",
        "EXXON",
        "EXXONMOBIL",
        "MOBIL",
        "CHEVRON",
        "TEXACO",
        "BP",
        "AMOCO",
        "SUNOCO",
        "MARATHON",
        "MARATHON PETRO",
        "SPEEDWAY",
        "CIRCLE K",
        "WAWA",
        "SHEETZ",
        "RACETRAC",
        "RACETRACK",
        "RACEWAY",
        "PILOT",
        "FLYING J",
        "LOVES",
        "LOVE'S",
        "KWIK TRIP",
        "KWICK",
        "KWIKTRIP",
        "QT",
        "QUIKTRIP",
        "QUICK TRIP",
        "CASEY",
        "CASEY'S",
        "CASEYS",
        "MURPHY USA",
        "MURPHYUSA",
        "MURPHY EXPRESS",
        "SAMS CLUB FUEL",
        "SAM'S CLUB GAS",
        "COSTCO GAS",
        "COSTCO FUEL",
        "BJS GAS",
        "KROGER FUEL",
        "GIANT EAGLE GAS",
        "GETGO",
        "GET GO",
        "MAVERIK",
        "MAVERICK",
        "KUMS",
        "KUM & GO",
        "HOLIDAY STATION",
        "CENEX",
        "SINCLAIR",
        "CITGO",
        "VALERO",
        "PHILLIPS 66",
        "CONOCO",
        "76 GAS",
        "ARCO",
        "ATLANTIC",
        "GULF",
        "HESS",
        "LUKOIL",
        "MAPCO",
        "STEWARTS",
        "STEWART'S",
        "TA TRAVEL",
        "PETRO STOPPING",
        "LOVES TRAVEL",
        "THORNTONS",
        "THORNTON",
        "STRIPES",
        "GATE PETROLEUM",
        "FUEL",
        "GAS STATION",
        "PETRO",
        "PETROLEUM",
        "UBER",
        "LYFT",
        "PARKING",
        "PARK MOBILE",
        "PARKMOBILE",
        "SPOTHERO",
        "METRO",
        "TRANSIT",
        "SUBWAY FARE",
        "TOLL",
        "EZPASS",
        "E-ZPASS",
        "FASTRAK",
        "SUNPASS",
        "AUTOZONE",
        "AUTO ZONE",
        "OREILLY",
        "O'REILLY",
        "ADVANCE AUTO",
        "NAPA AUTO",
        "PEPBOYS",
        "PEP BOYS",
        "JIFFY LUBE",
        "VALVOLINE",
        "FIRESTONE",
        "GOODYEAR",
        "DISCOUNT TIRE",
        "AMERICAS TIRE",
        "TIRE KINGDOM",
        "TIRES PLUS",
        "NTB",
        "MIDAS",
        "MAACO",
        "MEINEKE",
        "PENSKE",
        "CARWASH",
        "CAR WASH",
        "DMV",
        "UHAUL",
        "U-HAUL",
    ],
    "Groceries": [
        "KROGER",
        "SAFEWAY",
        "ALBERTSONS",
        "ALDI",
        "LIDL",
        "TRADER JOE",
        "TRADER JOE'S",
        "WHOLE FOODS",
        "GIANT EAGLE",
        "PUBLIX",
        "WEGMANS",
        "COSTCO",
        "SAMS CLUB",
        "SAM'S CLUB",
        "BJS WHOLESALE",
        "BJ'S WHOLESALE",
        "HEB",
        "H-E-B",
        "FOOD LION",
        "STOP SHOP",
        "STOP & SHOP",
        "SPROUTS",
        "GIANT",
        "HARRIS TEETER",
        "PIGGLY WIGGLY",
        "WINCO",
        "FOOD MART",
        "GROCERY",
        "MARKET BASKET",
        "FOOD 4 LESS",
        "FOOD4LESS",
        "SAVE A LOT",
        "SAVE-A-LOT",
        "PRICE CHOPPER",
        "SHOPRITE",
        "SHOP RITE",
        "ACME MARKET",
        "ACME SUPER",
        "JEWEL OSCO",
        "JEWEL-OSCO",
        "VONS",
        "RALPHS",
        "SMITHS",
        "SMITH'S",
        "FRY",
        "FRY'S",
        "DILLONS",
        "KING SOOPERS",
        "MEIJER",
        "SCHNUCKS",
        "HY-VEE",
        "HYVEE",
        "FAREWAY",
        "CUB FOODS",
        "STATER BROS",
        "WINN DIXIE",
        "WINN-DIXIE",
        "INGLES",
        "BI-LO",
        "BILO",
        "HARVEYS SUPER",
        "LUCKY SUPERMARKET",
        "RANCH MARKET",
        "CARDENAS",
        "FIESTA MART",
        "NORTHGATE",
        "99 RANCH",
        "H MART",
        "HMART",
        "ASIAN MARKET",
        "SUPERMERCADO",
        "GROCERY OUTLET",
        "FRESH THYME",
        "FRESH MARKET",
        "EARTH FARE",
        "NATURAL GROCERS",
        "7-ELEVEN",
        "7 ELEVEN",
        "711",
        "SEVEN ELEVEN",
    ],
    "Dining & Restaurants": [
        "RESTAURANT",
        "GRILL",
        "TAVERN",
        "DINER",
        "CAFE",
        "BISTRO",
        "KITCHEN",
        "EATERY",
        "STEAKHOUSE",
        "PIZZERIA",
        "TRATTORIA",
        "CANTINA",
        "MCDONALDS",
        "MCDONALD'S",
        "MCD",
        "BURGER KING",
        "WENDYS",
        "WENDY'S",
        "FIVE GUYS",
        "IN-N-OUT",
        "IN N OUT",
        "SHAKE SHACK",
        "WHATABURGER",
        "WHAT A BURGER",
        "CULVERS",
        "CULVER'S",
        "STEAK N SHAKE",
        "STEAK AND SHAKE",
        "CHECKERS",
        "RALLYS",
        "RALLY'S",
        "HARDEES",
        "HARDEE'S",
        "CARLS JR",
        "CARL'S JR",
        "SMASHBURGER",
        "FATBURGER",
        "HABIT BURGER",
        "WHITE CASTLE",
        "FREDDY",
        "FUDDRUCKERS",
        "CHICK-FIL-A",
        "CHICK FIL A",
        "CHICKFILA",
        "CFA",
        "RAISING CANE",
        "RAISING CANE'S",
        "CANES",
        "POPEYES",
        "POPEYE'S",
        "KFC",
        "KENTUCKY FRIED",
        "CHURCHS CHICKEN",
        "CHURCH'S",
        "BOJANGLES",
        "ZAXBYS",
        "ZAXBY'S",
        "WINGSTOP",
        "WING STOP",
        "BUFFALO WILD",
        "BWW",
        "HOOTERS",
        "SLIM CHICKENS",
        "PDQ",
        "GOLDEN CHICK",
        "CHIPOTLE",
        "TACO BELL",
        "QDOBA",
        "MOE",
        "MOE'S",
        "DEL TACO",
        "TACO CABANA",
        "TACO BUENO",
        "TACO JOHN",
        "EL POLLO LOCO",
        "CHRONIC TACOS",
        "TIJUANA FLATS",
        "BAJA FRESH",
        "SUBWAY",
        "JERSEY MIKE",
        "JERSEY MIKE'S",
        "JIMMY JOHN",
        "JIMMY JOHN'S",
        "FIREHOUSE SUBS",
        "POTBELLY",
        "PENN STATION",
        "QUIZNOS",
        "WHICH WICH",
        "SCHLOTZSKY",
        "MCALISTER",
        "MCALISTER'S",
        "JASON DELI",
        "JASON'S DELI",
        "DOMINOS",
        "DOMINO'S",
        "PIZZA HUT",
        "PAPA JOHN",
        "PAPA JOHN'S",
        "LITTLE CAESARS",
        "PAPA MURPHY",
        "PAPA MURPHY'S",
        "MARCOS PIZZA",
        "MARCO'S",
        "JETS PIZZA",
        "JET'S PIZZA",
        "HUNGRY HOWIES",
        "CICIS",
        "CICI'S",
        "ROUND TABLE",
        "MOD PIZZA",
        "BLAZE PIZZA",
        "PIEOLOGY",
        "DONATOS",
        "ARBYS",
        "ARBY'S",
        "SONIC",
        "SONIC DRIVE",
        "LONG JOHN SILVER",
        "CAPTAIN D",
        "PANDA EXPRESS",
        "NOODLES",
        "NOODLES AND CO",
        "CAVA",
        "SWEETGREEN",
        "JUST SALAD",
        "CHOPT",
        "TROPICAL SMOOTHIE",
        "SMOOTHIE KING",
        "JAMBA",
        "JAMBA JUICE",
        "PLANET SMOOTHIE",
        "AUNTIE ANNE",
        "AUNTIE ANNE'S",
        "CINNABON",
        "WETZEL",
        "WETZEL'S",
        "WOK BOX",
        "POKE",
        "PANERA",
        "CHILIS",
        "CHILI'S",
        "APPLEBEE",
        "APPLEBEE'S",
        "TGI FRIDAY",
        "TGIF",
        "FRIDAYS",
        "OLIVE GARDEN",
        "RED LOBSTER",
        "OUTBACK",
        "TEXAS ROADHOUSE",
        "LONGHORN",
        "CHEESECAKE FACTORY",
        "P.F. CHANG",
        "PF CHANG",
        "RED ROBIN",
        "RUBY TUESDAY",
        "GOLDEN CORRAL",
        "DENNYS",
        "DENNY'S",
        "IHOP",
        "WAFFLE HOUSE",
        "CRACKER BARREL",
        "BOB EVANS",
        "PERKINS",
        "BJS RESTAURANT",
        "BJ'S RESTAURANT",
        "YARD HOUSE",
        "CHEVY",
        "CHEDDAR",
        "CHEDDAR'S",
        "CARRABBA",
        "CARRABBA'S",
        "MAGGIANO",
        "MAGGIANO'S",
        "BONEFISH",
        "BAHAMA BREEZE",
        "SEASONS 52",
        "BENIHANA",
        "BUCA DI BEPPO",
        "CALIFORNIA PIZZA",
        "CPK",
        "HARD ROCK CAFE",
        "DAVE AND BUSTER",
        "DAVE & BUSTER",
        "MAIN EVENT",
        "SQ *",
        "SQUARE *",
        "TST*",
        "TOAST*",
    ],
    "Coffee & Drinks": [
        "STARBUCKS",
        "DUNKIN",
        "DUNKIN'",
        "DUNKIN DONUTS",
        "PEETS",
        "PEET'S",
        "COFFEE",
        "PHILZ",
        "BLUE BOTTLE",
        "DUTCH BROS",
        "CARIBOU",
        "TIM HORTON",
        "TIM HORTON'S",
        "SCOOTERS",
        "SCOOTER'S",
        "BLACK RIFLE",
        "INTELLIGENTSIA",
        "LA COLOMBE",
        "GREGORYS",
        "GREGORY'S",
        "BIGGBY",
        "KRISPY KREME",
        "EINSTEIN BROS",
        "BRUEGGERS",
        "BRUEGGER'S",
        "BAR",
        "BREWERY",
        "PUB",
        "TAPROOM",
        "WINE",
        "LIQUOR",
        "SPIRITS",
        "BEER",
        "COCKTAIL",
        "TOTAL WINE",
        "BINNYS",
        "BINNY'S",
        "ABC STORE",
        "ABC LIQUOR",
        "BEVMO",
        "SPEC'S",
        "SPECS",
        "GOODY GOODY",
        "TWIN LIQUOR",
    ],
    "Food Delivery": [
        "DOORDASH",
        "UBER EATS",
        "UBEREATS",
        "GRUBHUB",
        "POSTMATES",
        "SEAMLESS",
        "INSTACART",
        "GOPUFF",
        "CAVIAR",
        "FAVOR",
        "BITE SQUAD",
        "DELIVEROO",
    ],
    "Shopping": [
        "AMAZON",
        "TARGET",
        "WALMART",
        "NORDSTROM",
        "MACYS",
        "KOHLS",
        "TJ MAXX",
        "TJMAXX",
        "MARSHALLS",
        "ROSS",
        "BURLINGTON",
        "OLD NAVY",
        "GAP",
        "ZARA",
        "H&M",
        "UNIQLO",
        "NIKE",
        "ADIDAS",
        "FOOTLOCKER",
        "DICKS SPORTING",
        "REI",
        "ACADEMY",
        "BED BATH",
        "POTTERY BARN",
        "CRATE BARREL",
        "WILLIAMS SONOMA",
        "PIER 1",
        "WORLD MARKET",
        "CONTAINER STORE",
        "IKEA",
        "WAYFAIR",
        "OVERSTOCK",
        "ETSY",
    ],
    "Home & Garden": [
        "LOWES",
        "HOME DEPOT",
        "MENARDS",
        "ACE HARDWARE",
        "TRUE VALUE",
        "HARBOR FREIGHT",
        "TRACTOR SUPPLY",
        "NURSERY",
        "GARDEN CENTER",
        "LANDSCAP",
        "LAWN",
        "TREE SERVICE",
        "PEST CONTROL",
        "ORKIN",
        "TERMINIX",
        "SHERWIN WILLIAMS",
        "BENJAMIN MOORE",
        "FLOOR DECOR",
        "LUMBER",
        "PLUMBING",
        "ELECTRICAL SUPPLY",
        "POOL SUPPLY",
    ],
    "Subscriptions": [
        "NETFLIX",
        "SPOTIFY",
        "HULU",
        "DISNEY",
        "APPLE.COM/BILL",
        "AMAZON PRIME",
        "HBO",
        "YOUTUBE",
        "AUDIBLE",
        "PARAMOUNT",
        "PEACOCK",
        "DISCOVERY",
        "ESPN",
        "SLING",
        "FUBO",
        "ADOBE",
        "MICROSOFT",
        "DROPBOX",
        "GOOGLE STORAGE",
        "ICLOUD",
        "LINKEDIN",
        "PATREON",
        "SUBSTACK",
        "MEDIUM",
        "NEW YORK TIMES",
        "WSJ",
        "WASHINGTON POST",
        "ATHLETIC",
        "CALM",
        "HEADSPACE",
        "MASTERCLASS",
        "SKILLSHARE",
        "COURSERA",
        "DUOLINGO",
    ],
    "Travel & Vacation": [
        "AIRBNB",
        "VRBO",
        "MARRIOTT",
        "HILTON",
        "HYATT",
        "IHG",
        "HOLIDAY INN",
        "BEST WESTERN",
        "WYNDHAM",
        "DELTA",
        "UNITED",
        "AMERICAN AIR",
        "SOUTHWEST",
        "JETBLUE",
        "SPIRIT",
        "FRONTIER",
        "ALASKA AIR",
        "HOTEL",
        "FLIGHT",
        "AIRLINE",
        "EXPEDIA",
        "BOOKING.COM",
        "PRICELINE",
        "KAYAK",
        "HOTWIRE",
        "ORBITZ",
        "TRAVELOCITY",
        "TRIP",
        "CRUISE",
        "CARNIVAL",
        "ROYAL CARIBBEAN",
        "NORWEGIAN",
        "RENTAL CAR",
        "HERTZ",
        "ENTERPRISE",
        "NATIONAL",
        "AVIS",
        "BUDGET",
    ],
    "Entertainment": [
        "MOVIE",
        "CINEMA",
        "THEATER",
        "CONCERT",
        "TICKETMASTER",
        "AMC",
        "REGAL",
        "CINEMARK",
        "FANDANGO",
        "STUB HUB",
        "VIVID SEATS",
        "SEAT GEEK",
        "LIVE NATION",
        "AXS",
        "EVENTBRITE",
        "MUSEUM",
        "ZOO",
        "AQUARIUM",
        "THEME PARK",
        "DISNEY PARK",
        "UNIVERSAL",
        "SIX FLAGS",
        "CEDAR FAIR",
        "BOWLING",
        "ARCADE",
        "GOLF",
        "TOPGOLF",
        "MINI GOLF",
        "ESCAPE ROOM",
        "TRAMPOLINE",
        "LASER TAG",
        "GO KART",
        "STEAM",
        "PLAYSTATION",
        "XBOX",
        "NINTENDO",
        "EPIC GAMES",
        "TWITCH",
    ],
    "Healthcare & Medical": [
        "PHARMACY",
        "CVS",
        "WALGREENS",
        "RITE AID",
        "HOSPITAL",
        "DOCTOR",
        "MEDICAL",
        "DENTAL",
        "DENTIST",
        "OPTOMETRIST",
        "VISION",
        "EYECARE",
        "URGENT CARE",
        "CLINIC",
        "LABCORP",
        "QUEST DIAG",
        "KAISER",
        "BLUE CROSS",
        "AETNA",
        "CIGNA",
        "UNITED HEALTH",
        "HUMANA",
        "THERAPY",
        "COUNSELING",
        "CHIROPRACT",
        "DERMATOLOG",
        "ORTHOPED",
    ],
    "Utilities": [
        "ELECTRIC",
        "GAS BILL",
        "WATER BILL",
        "INTERNET",
        "COMCAST",
        "XFINITY",
        "ATT",
        "AT&T",
        "VERIZON",
        "TMOBILE",
        "T-MOBILE",
        "SPRINT",
        "SPECTRUM",
        "COX",
        "CENTURY LINK",
        "FRONTIER",
        "DISH",
        "DIRECTV",
        "DUKE ENERGY",
        "DOMINION",
        "PG&E",
        "CONEDISON",
        "PSEG",
        "FPL",
        "XCEL",
        "TRASH",
        "WASTE",
        "SEWER",
        "CABLE",
    ],
    "Housing & Rent": [
        "RENT",
        "LEASE",
        "MORTGAGE",
        "HOA",
        "PROPERTY MANAGEMENT",
        "APARTMENT",
        "REALTOR",
        "REAL ESTATE",
        "ZILLOW",
        "TRULIA",
        "REDFIN",
        "APARTMENTS.COM",
        "ZUMPER",
        "COZY",
        "AVAIL",
    ],
    "Personal Care": [
        "SALON",
        "BARBER",
        "HAIRCUT",
        "SPA",
        "MASSAGE",
        "NAIL",
        "MANICURE",
        "PEDICURE",
        "WAXING",
        "ULTA",
        "SEPHORA",
        "BATH BODY",
        "LUSH",
        "AVEDA",
        "GREAT CLIPS",
        "SUPERCUTS",
        "SPORTS CLIPS",
        "DRYBAR",
        "BEAUTY",
        "COSMETIC",
    ],
    "Fitness & Gym": [
        "GYM",
        "FITNESS",
        "PLANET FITNESS",
        "LA FITNESS",
        "ANYTIME FITNESS",
        "EQUINOX",
        "ORANGETHEORY",
        "CROSSFIT",
        "F45",
        "PELOTON",
        "SOULCYCLE",
        "BARRY",
        "PURE BARRE",
        "YOGA",
        "PILATES",
        "YMCA",
        "GOLD GYM",
        "24 HOUR",
        "CRUNCH",
        "LIFETIME FITNESS",
    ],
    "Pets": [
        "PETCO",
        "PETSMART",
        "PET SUPPLIES",
        "CHEWY",
        "BARKBOX",
        "VET",
        "VETERINAR",
        "ANIMAL HOSPITAL",
        "BANFIELD",
        "VCA",
        "GROOMING",
        "DOG WALK",
        "PET SIT",
        "ROVER",
        "WAG",
        "DOGGY",
        "KENNEL",
        "BOARDING",
    ],
    "Insurance": [
        "GEICO",
        "STATE FARM",
        "ALLSTATE",
        "PROGRESSIVE",
        "LIBERTY MUTUAL",
        "FARMERS",
        "USAA",
        "NATIONWIDE",
        "TRAVELERS",
        "METLIFE",
        "PRUDENTIAL",
        "INSURANCE",
        "INSUR",
        "POLICY",
        "PREMIUM",
    ],
    "Education": [
        "TUITION",
        "UNIVERSITY",
        "COLLEGE",
        "SCHOOL",
        "ACADEMY",
        "STUDENT",
        "TEXTBOOK",
        "CHEGG",
        "BARTLEBY",
        "PEARSON",
        "MCGRAW",
        "CENGAGE",
        "TUTORING",
        "KUMON",
        "MATHNASIUM",
        "SYLVAN",
        "KAPLAN",
        "PRINCETON REVIEW",
        "SAT",
        "ACT",
        "GRE",
        "LSAT",
        "MCAT",
    ],
    "Gifts & Donations": [
        "GIFT",
        "CHARITY",
        "DONATE",
        "DONATION",
        "NONPROFIT",
        "FOUNDATION",
        "RED CROSS",
        "UNITED WAY",
        "SALVATION ARMY",
        "GOODWILL",
        "GOFUNDME",
        "KICKSTARTER",
        "INDIEGOGO",
        "PATREON",
        "HALLMARK",
        "1800FLOWERS",
        "FTD",
        "PROFLOWERS",
        "EDIBLE",
    ],
    "Kids & Family": [
        "DAYCARE",
        "CHILDCARE",
        "PRESCHOOL",
        "BABYSIT",
        "CARE.COM",
        "SITTERCITY",
        "BRIGHT HORIZONS",
        "KINDERCARE",
        "TOY",
        "TOYS R US",
        "LEGO",
        "DISNEY STORE",
        "BUILD A BEAR",
        "FIVE BELOW",
        "CLAIRE",
        "PARTY CITY",
        "SPIRIT HALLOWEEN",
        "GYMBOREE",
        "CARTERS",
        "OSH KOSH",
        "KIDS",
        "CHILDRENS",
        "BABY",
        "BABIES R US",
        "BUY BUY BABY",
    ],
    "Electronics": [
        "BEST BUY",
        "APPLE STORE",
        "MICROSOFT STORE",
        "B&H PHOTO",
        "MICRO CENTER",
        "NEWEGG",
        "GAMESTOP",
        "RADIOSHACK",
        "FRYS",
        "ELECTRONIC",
        "COMPUTER",
        "LAPTOP",
        "PHONE",
        "MOBILE",
        "CELLULAR",
        "TECH",
        "GEEK SQUAD",
    ],
}

# (category, subcategory, patterns); refines a category already chosen from
# CATEGORY_PATTERNS. The first entry for that category that matches wins.
SUBCATEGORY_PATTERNS: list[tuple[str, str, list[str]]] = [
    (
        "Auto & Transport",
        "Gas & Fuel",
        [
            "SHELL", "EXXON", "CHEVRON", "BP", "SUNOCO", "MARATHON", "SPEEDWAY", "CIRCLE K",
            "WAWA", "SHEETZ", "RACETRAC", "PILOT", "FLYING J", "LOVES", "KWIK TRIP", "QT",
            "QUIKTRIP", "CASEY", "MURPHY USA", "COSTCO GAS", "CITGO", "VALERO", "PHILLIPS 66",
            "CONOCO", "ARCO", "GULF", "FUEL", "GAS STATION", "PETRO",
        ],
    ),
    (
        "Auto & Transport",
        "Parking",
        [
            "PARKING", "PARK MOBILE", "PARKMOBILE", "SPOTHERO",
        ],
    ),
    (
        "Auto & Transport",
        "Ride Share",
        [
            "UBER", "LYFT",
        ],
    ),
    (
        "Auto & Transport",
        "Public Transit",
        [
            "METRO", "TRANSIT", "SUBWAY FARE",
        ],
    ),
    (
        "Auto & Transport",
        "Tolls",
        [
            "TOLL", "EZPASS", "E-ZPASS", "FASTRAK", "SUNPASS",
        ],
    ),
    (
        "Auto & Transport",
        "Auto Maintenance",
        [
            "AUTOZONE", "OREILLY", "ADVANCE AUTO", "NAPA AUTO", "PEPBOYS", "JIFFY LUBE",
            "VALVOLINE", "FIRESTONE", "GOODYEAR", "DISCOUNT TIRE", "MIDAS", "MEINEKE",
        ],
    ),
    (
        "Coffee & Drinks",
        "Coffee Shops",
        [
            "STARBUCKS", "DUNKIN", "PEETS", "COFFEE", "PHILZ", "BLUE BOTTLE", "DUTCH BROS",
            "CARIBOU", "TIM HORTON", "SCOOTERS", "BLACK RIFLE",
        ],
    ),
    (
        "Coffee & Drinks",
        "Bars & Alcohol",
        [
            "BAR", "BREWERY", "PUB", "TAPROOM", "WINE", "LIQUOR", "SPIRITS", "BEER", "COCKTAIL",
            "TOTAL WINE", "BINNYS", "ABC LIQUOR", "BEVMO",
        ],
    ),
    (
        "Coffee & Drinks",
        "Smoothies & Juice",
        [
            "SMOOTHIE", "JAMBA", "TROPICAL SMOOTHIE", "JUICE",
        ],
    ),
    (
        "Dining & Restaurants",
        "Fast Food",
        [
            "MCDONALDS", "BURGER KING", "WENDYS", "TACO BELL", "CHICK-FIL-A", "CHICKFILA",
            "RAISING CANE", "POPEYES", "KFC", "ARBYS", "SONIC", "WHATABURGER", "CULVERS",
            "HARDEES", "CARLS JR", "IN-N-OUT", "FIVE GUYS", "ZAXBYS", "BOJANGLES", "WINGSTOP",
            "LITTLE CAESARS", "DOMINOS", "PIZZA HUT", "PAPA JOHN", "SUBWAY", "JERSEY MIKE",
            "JIMMY JOHN", "CHIPOTLE", "QDOBA", "DEL TACO", "PANDA EXPRESS", "LONG JOHN SILVER",
            "CAPTAIN D",
        ],
    ),
    (
        "Dining & Restaurants",
        "Casual Dining",
        [
            "APPLEBEE", "CHILIS", "TGI FRIDAY", "OLIVE GARDEN", "RED LOBSTER", "OUTBACK",
            "TEXAS ROADHOUSE", "LONGHORN", "RED ROBIN", "RUBY TUESDAY", "GOLDEN CORRAL",
            "DENNYS", "IHOP", "WAFFLE HOUSE", "CRACKER BARREL", "BOB EVANS", "BJS RESTAURANT",
            "CHEDDAR", "CARRABBA", "BONEFISH", "BAHAMA BREEZE",
        ],
    ),
    (
        "Dining & Restaurants",
        "Fine Dining",
        [
            "CHEESECAKE FACTORY", "P.F. CHANG", "PF CHANG", "CAPITAL GRILLE", "RUTH CHRIS",
            "MORTONS", "FLEMINGS", "SEASONS 52", "EDDIE V",
        ],
    ),
    (
        "Dining & Restaurants",
        "Takeout",
        [
            "SQ *", "SQUARE *", "TST*", "TOAST*",
        ],
    ),
    (
        "Groceries",
        "Supermarket",
        [
            "KROGER", "SAFEWAY", "ALBERTSONS", "PUBLIX", "GIANT", "FOOD LION", "HEB", "MEIJER",
            "STOP SHOP", "SHOPRITE", "ACME", "RALPHS", "VONS", "WEGMANS",
        ],
    ),
    (
        "Groceries",
        "Organic & Natural",
        [
            "WHOLE FOODS", "TRADER JOE", "SPROUTS", "NATURAL GROCERS", "EARTH FARE",
            "FRESH MARKET",
        ],
    ),
    (
        "Groceries",
        "Warehouse Clubs",
        [
            "COSTCO", "SAMS CLUB", "BJS WHOLESALE",
        ],
    ),
    (
        "Groceries",
        "Specialty Foods",
        [
            "H MART", "HMART", "99 RANCH", "ASIAN MARKET",
        ],
    ),
    (
        "Food Delivery",
        "Delivery Apps",
        [
            "DOORDASH", "UBER EATS", "GRUBHUB", "POSTMATES", "SEAMLESS", "CAVIAR",
        ],
    ),
    (
        "Food Delivery",
        "Meal Kits",
        [
            "HELLOFRESH", "BLUE APRON", "HOME CHEF", "FRESHLY", "FACTOR",
        ],
    ),
    (
        "Entertainment",
        "Movies & TV",
        [
            "AMC", "REGAL", "CINEMARK", "FANDANGO", "MOVIE", "CINEMA", "THEATER",
        ],
    ),
    (
        "Entertainment",
        "Music & Concerts",
        [
            "TICKETMASTER", "LIVE NATION", "STUB HUB", "SEAT GEEK", "AXS", "CONCERT",
        ],
    ),
    (
        "Entertainment",
        "Games",
        [
            "STEAM", "PLAYSTATION", "XBOX", "NINTENDO", "EPIC GAMES", "TWITCH", "GAME",
        ],
    ),
    (
        "Entertainment",
        "Streaming Services",
        [
            "NETFLIX", "HULU", "DISNEY", "HBO", "PARAMOUNT", "PEACOCK", "AMAZON PRIME VIDEO",
            "YOUTUBE TV", "SLING", "FUBO",
        ],
    ),
    (
        "Entertainment",
        "Sports & Recreation",
        [
            "GOLF", "TOPGOLF", "BOWLING", "ZOO", "AQUARIUM", "MUSEUM", "THEME PARK",
            "SIX FLAGS", "ARCADE",
        ],
    ),
    (
        "Shopping",
        "Department Stores",
        [
            "NORDSTROM", "MACYS", "DILLARDS", "BLOOMINGDALE", "NEIMAN", "SAKS", "TJ MAXX",
            "MARSHALLS", "ROSS", "BURLINGTON", "KOHLS",
        ],
    ),
    (
        "Shopping",
        "Clothing",
        [
            "OLD NAVY", "GAP", "ZARA", "H&M", "UNIQLO", "FOREVER 21", "EXPRESS",
            "BANANA REPUBLIC", "J CREW",
        ],
    ),
    (
        "Shopping",
        "Shoes",
        [
            "NIKE", "ADIDAS", "FOOTLOCKER", "FINISH LINE", "DSW", "FAMOUS FOOTWEAR",
        ],
    ),
    (
        "Shopping",
        "Online Shopping",
        [
            "AMAZON", "EBAY", "ETSY", "WAYFAIR", "OVERSTOCK",
        ],
    ),
    (
        "Healthcare & Medical",
        "Pharmacy",
        [
            "CVS", "WALGREENS", "RITE AID", "PHARMACY",
        ],
    ),
    (
        "Healthcare & Medical",
        "Doctor",
        [
            "DOCTOR", "MEDICAL", "PHYSICIAN", "CLINIC", "URGENT CARE", "HOSPITAL",
        ],
    ),
    (
        "Healthcare & Medical",
        "Dentist",
        [
            "DENTAL", "DENTIST", "ORTHODONT",
        ],
    ),
    (
        "Healthcare & Medical",
        "Vision",
        [
            "OPTOMETRIST", "VISION", "EYECARE", "LENSCRAFTERS", "PEARLE VISION",
        ],
    ),
    (
        "Healthcare & Medical",
        "Mental Health",
        [
            "THERAPY", "COUNSELING", "MENTAL HEALTH", "PSYCHIATR",
        ],
    ),
    (
        "Home & Garden",
        "Home Improvement",
        [
            "LOWES", "HOME DEPOT", "MENARDS", "ACE HARDWARE", "TRUE VALUE", "HARBOR FREIGHT",
        ],
    ),
    (
        "Home & Garden",
        "Garden & Lawn",
        [
            "NURSERY", "GARDEN CENTER", "LANDSCAP", "LAWN", "TREE SERVICE",
        ],
    ),
    (
        "Home & Garden",
        "Furniture",
        [
            "IKEA", "WAYFAIR", "POTTERY BARN", "CRATE BARREL", "WEST ELM",
            "RESTORATION HARDWARE",
        ],
    ),
    (
        "Utilities",
        "Electric",
        [
            "ELECTRIC", "DUKE ENERGY", "DOMINION", "PG&E", "CONEDISON", "XCEL", "FPL",
        ],
    ),
    (
        "Utilities",
        "Internet",
        [
            "INTERNET", "COMCAST", "XFINITY", "SPECTRUM", "COX", "CENTURY LINK",
            "FRONTIER COMM",
        ],
    ),
    (
        "Utilities",
        "Phone",
        [
            "ATT", "AT&T", "VERIZON", "TMOBILE", "T-MOBILE", "SPRINT",
        ],
    ),
    (
        "Utilities",
        "Cable & TV",
        [
            "CABLE", "DISH", "DIRECTV",
        ],
    ),
    (
        "Utilities",
        "Water",
        [
            "WATER BILL", "WATER UTILITY",
        ],
    ),
    (
        "Travel & Vacation",
        "Flights",
        [
            "DELTA", "UNITED", "AMERICAN AIR", "SOUTHWEST", "JETBLUE", "SPIRIT", "FRONTIER",
            "ALASKA AIR", "AIRLINE", "FLIGHT",
        ],
    ),
    (
        "Travel & Vacation",
        "Hotels",
        [
            "MARRIOTT", "HILTON", "HYATT", "IHG", "HOLIDAY INN", "BEST WESTERN", "WYNDHAM",
            "HOTEL", "AIRBNB", "VRBO",
        ],
    ),
    (
        "Travel & Vacation",
        "Car Rental",
        [
            "HERTZ", "ENTERPRISE", "NATIONAL", "AVIS", "BUDGET", "RENTAL CAR", "CAR RENTAL",
        ],
    ),
    (
        "Travel & Vacation",
        "Cruises",
        [
            "CARNIVAL", "ROYAL CARIBBEAN", "NORWEGIAN", "CRUISE",
        ],
    ),
    (
        "Fitness & Gym",
        "Gym Membership",
        [
            "PLANET FITNESS", "LA FITNESS", "ANYTIME FITNESS", "EQUINOX", "24 HOUR", "CRUNCH",
            "GOLD GYM", "LIFETIME FITNESS", "YMCA",
        ],
    ),
    (
        "Fitness & Gym",
        "Fitness Classes",
        [
            "ORANGETHEORY", "CROSSFIT", "F45", "SOULCYCLE", "BARRY", "PURE BARRE", "YOGA",
            "PILATES",
        ],
    ),
    (
        "Fitness & Gym",
        "Supplements",
        [
            "GNC", "VITAMIN SHOPPE", "SUPPLEMENT",
        ],
    ),
    (
        "Personal Care",
        "Hair & Salon",
        [
            "SALON", "BARBER", "HAIRCUT", "GREAT CLIPS", "SUPERCUTS", "SPORTS CLIPS", "DRYBAR",
        ],
    ),
    (
        "Personal Care",
        "Spa & Massage",
        [
            "SPA", "MASSAGE",
        ],
    ),
    (
        "Personal Care",
        "Cosmetics",
        [
            "ULTA", "SEPHORA", "COSMETIC", "BEAUTY",
        ],
    ),
    (
        "Pets",
        "Pet Supplies",
        [
            "PETCO", "PETSMART", "PET SUPPLIES", "CHEWY",
        ],
    ),
    (
        "Pets",
        "Vet",
        [
            "VET", "VETERINAR", "ANIMAL HOSPITAL", "BANFIELD", "VCA",
        ],
    ),
    (
        "Pets",
        "Pet Grooming",
        [
            "GROOMING", "PET GROOM",
        ],
    ),
    (
        "Subscriptions",
        "Streaming",
        [
            "SPOTIFY", "APPLE MUSIC", "YOUTUBE PREMIUM", "PANDORA", "TIDAL",
        ],
    ),
    (
        "Subscriptions",
        "Software",
        [
            "ADOBE", "MICROSOFT 365", "DROPBOX", "GOOGLE STORAGE", "ICLOUD",
        ],
    ),
    (
        "Subscriptions",
        "News & Magazines",
        [
            "NEW YORK TIMES", "WSJ", "WASHINGTON POST", "ATHLETIC", "SUBSTACK", "MEDIUM",
        ],
    ),
    (
        "Kids & Family",
        "Childcare",
        [
            "DAYCARE", "CHILDCARE", "PRESCHOOL", "BRIGHT HORIZONS", "KINDERCARE",
        ],
    ),
    (
        "Kids & Family",
        "Toys & Games",
        [
            "TOY", "LEGO", "DISNEY STORE", "BUILD A BEAR", "FIVE BELOW",
        ],
    ),
    (
        "Kids & Family",
        "Kids Clothing",
        [
            "CARTERS", "OSH KOSH", "GYMBOREE", "KIDS CLOTHING", "CHILDRENS PLACE",
        ],
    ),
    (
        "Gifts & Donations",
        "Gifts",
        [
            "HALLMARK", "1800FLOWERS", "FTD", "PROFLOWERS", "GIFT",
        ],
    ),
    (
        "Gifts & Donations",
        "Charity",
        [
            "CHARITY", "DONATE", "DONATION", "RED CROSS", "UNITED WAY", "SALVATION ARMY",
            "GOFUNDME",
        ],
    ),
]


@lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def safe_search(pattern: str, text: str) -> bool:
    """Case-insensitive regex search; a pattern that fails to compile or run never matches.

    Args:
        pattern: Regular expression source, possibly user-authored
        text: Text to search

    Returns:
        True if the pattern is found in the text
    """
    try:
        return _compile(pattern).search(text) is not None
    except (re.error, OverflowError, RecursionError):
        return False


def matches_any_pattern(text: str | None, patterns: list[str]) -> bool:
    """Return True if any pattern is found in ``text``.

    Plain patterns are case-insensitive substrings; patterns containing ``.*``
    are case-insensitive regular expressions.
    """
    if not text:
        return False
    upper = text.upper()
    for pattern in patterns:
        if ".*" in pattern:
            if safe_search(pattern, upper):
                return True
        elif pattern.upper() in upper:
            return True
    return False
