"""
Shopping Constants

The shopping-list category taxonomy. Category names and keyword lists are
shown as-is by the UI, so they must stay byte-identical.
"""

# Category -> keywords, scanned in this order; first match wins
SHOPPING_CATEGORIES = {
    'Groente & Fruit': [
        'ui', 'uien', 'knoflook', 'tomaat', 'tomaten', 'paprika', 'wortel', 'wortels',
        'spinazie', 'sla', 'komkommer', 'courgette', 'aubergine', 'broccoli', 'bloemkool',
        'champignon', 'champignons', 'prei', 'bosui', 'lente-ui', 'gember', 'citroen',
        'limoen', 'avocado', 'pompoen', 'zoete aardappel', 'aardappel', 'aardappelen',
        'paksoi', 'sperziebonen', 'mais', 'erwten', 'kikkererwten', 'bonen', 'linzen',
        'appel', 'banaan', 'mango', 'ananas', 'granaatappel', 'basilicum', 'koriander',
        'peterselie', 'munt', 'bieslook', 'dille', 'rode ui', 'sjalot', 'bleekselderij',
    ],
    'Zuivel & Eieren': [
        'melk', 'room', 'slagroom', 'crème fraîche', 'yoghurt', 'kwark', 'kaas',
        'mozzarella', 'parmezaan', 'geitenkaas', 'feta', 'ricotta', 'mascarpone',
        'boter', 'ei', 'eieren', 'halloumi', 'cottage cheese',
    ],
    'Vlees & Vis': [
        'kip', 'kipfilet', 'kippenbouten', 'gehakt', 'rundergehakt', 'varkensvlees',
        'spek', 'bacon', 'worst', 'chorizo', 'zalm', 'garnalen', 'tonijn', 'kabeljauw',
        'makreel', 'mosselen', 'vis', 'kalkoen', 'eend', 'lam',
    ],
    'Pasta, Rijst & Granen': [
        'pasta', 'spaghetti', 'penne', 'tagliatelle', 'orzo', 'gnocchi', 'noedels',
        'rijst', 'basmatirijst', 'risottorijst', 'couscous', 'bulgur', 'quinoa',
        'brood', 'tortilla', 'wraps', 'naanbrood', 'pitabrood', 'bladerdeeg',
    ],
    'Conserven & Sauzen': [
        'tomatenpuree', 'passata', 'gepelde tomaten', 'tomatenblokjes', 'kokosmelk',
        'sojasaus', 'oestersaus', 'vissaus', 'sriracha', 'sambal', 'ketjap',
        'mayonaise', 'mosterd', 'ketchup', 'pesto', 'olijven', 'kappertjes',
        'zongedroogde tomaten', 'bonen', 'kidneybonen', 'witte bonen', 'linzen',
    ],
    'Kruiden & Specerijen': [
        'zout', 'peper', 'paprikapoeder', 'komijn', 'kurkuma', 'koriander', 'kaneel',
        'nootmuskaat', 'cayennepeper', 'chilipoeder', 'oregano', 'tijm', 'rozemarijn',
        'laurier', 'currypoeder', 'garam masala', 'ras el hanout', "za'atar",
        'chilivlokken', 'kruidnagel', 'kardemom', 'foelie', 'venkelzaad',
    ],
    'Noten & Zaden': [
        'cashewnoten', "pinda's", 'amandelen', 'walnoten', 'pijnboompitten',
        'sesamzaad', 'zonnebloempitten', 'pompoenpitten', 'lijnzaad', 'chiazaad',
    ],
    'Olie & Azijn': [
        'olijfolie', 'zonnebloemolie', 'sesamolie', 'kokosolie', 'azijn', 'balsamico',
        'wijnazijn', 'rijstazijn', 'appelazijn',
    ],
    'Overig': [],
}

FALLBACK_CATEGORY = 'Overig'

# Display order of the grouped shopping list
CATEGORY_ORDER = list(SHOPPING_CATEGORIES)

# Descriptors stripped before ingredient names are compared
LEADING_DESCRIPTORS = (
    'vers', 'verse', 'biologisch', 'biologische', 'groot', 'grote', 'klein', 'kleine',
    'rood', 'rode', 'groen', 'groene', 'geel', 'gele', 'wit', 'witte',
)
TRAILING_DESCRIPTORS = ('vers', 'biologisch', 'groot', 'klein', 'rood', 'groen', 'geel', 'wit')

SHOPPING_LIST_TITLE = '\U0001f6d2 Boodschappenlijst'
