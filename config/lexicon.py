"""
Static lexicon for ReviewLens.

Column-name candidates, sentiment keywords and category keywords shared
by every stage of the pipeline. All tables are read-only and loaded once.
"""

from types import MappingProxyType

# Candidate column names per semantic field, tried in order (English + French).
FIELD_CANDIDATES = MappingProxyType({
    "rating": ("rating", "Review power", "Review score", "Score", "Stars", "Note"),
    "text": ("text", "review", "Overall review", "content", "comment", "feedback", "body",
             "Commentaire", "Avis"),
    "date": ("date", "Date", "Check-out", "Check-in", "Timestamp", "created_at"),
    "source": ("source", "Source", "Channel", "Platform", "Origin", "Canal", "Plateforme"),
    "author": ("author", "Author", "Reviewer Name", "Guest name", "User", "Name", "Auteur"),
    "listing_name": ("listingName", "Listing Name", "External Listing Name", "Listing ID",
                     "Property", "Logement"),
    "sentiment": ("sentiment", "Sentiment"),
    "tags": ("tags", "Tags", "Labels", "Keywords", "Étiquettes"),
})

# Columns the upload form documents as required.
REQUIRED_COLUMNS = ("date", "rating", "text", "source")

POSITIVE_KEYWORDS = (
    "excellent", "amazing", "great", "awesome", "recommend", "perfect", "love", "good",
    "nice", "pleasure", "smooth", "timely", "wonderful", "guest", "super",
    "bien", "bon", "merci", "recommande", "plaisir", "exceptionnel", "sympa", "respect",
    "adored", "adoré",
)

NEGATIVE_KEYWORDS = (
    "bad", "terrible", "horrible", "dirty", "poor", "worst", "waste", "rude", "issues",
    "disappointed", "déçu", "sale", "mauvais", "horreur", "bruit", "fuir", "jamais",
    "remboursement", "poubelle",
)

# Tag used when a negative review matches no category.
FALLBACK_TAG = "General Complaint"

# Ordered category -> keywords table. Declaration order is tag order.
CATEGORY_KEYWORDS = (
    ("Cleanliness", (
        "clean", "dirt", "hygiene", "dust", "mold", "tidy", "mess", "stain", "smell", "hair",
        "cockroach", "bug", "insect", "rat", "mouse", "mice",
        "propre", "sale", "poussière", "moisissure", "tache", "odeur", "poil", "insecte",
        "souris", "ménage", "nettoyage",
    )),
    ("Accuracy", (
        "accuracy", "description", "photo", "misleading", "listing", "picture", "different",
        "fake", "lie",
        "précision", "trompeur", "annonce", "image", "différent", "faux", "mensonge",
    )),
    ("Check-in", (
        "check-in", "check in", "key", "access", "arrival", "lockbox", "code", "enter", "door",
        "lock",
        "arrivée", "clé", "accès", "boîte à clé", "entrer", "porte", "serrure",
    )),
    ("Communication", (
        "communication", "respond", "reply", "host", "manager", "message", "text", "call",
        "phone", "answer",
        "réponse", "répondre", "hôte", "gérant", "appel", "téléphone", "contact",
    )),
    ("Location", (
        "location", "area", "noise", "safe", "neighborhood", "street", "distance", "view",
        "loud", "party", "neighbor",
        "emplacement", "quartier", "bruit", "sûr", "rue", "vue", "bruyant", "fête", "voisin",
    )),
    ("Value", (
        "value", "price", "expensive", "worth", "cost", "cheap", "overpriced",
        "valeur", "prix", "cher", "coût", "dispendieux", "qualité-prix",
    )),
    ("Comfort", (
        "bed", "mattress", "sleep", "pillow", "comfort", "ac", "heat", "cold", "temperature",
        "lit", "matelas", "dormir", "confort", "chaud", "froid", "climatisation",
    )),
    ("Facilities", (
        "facilities", "kitchen", "fridge", "oven", "microwave", "bath", "shower", "water",
        "toilet", "wifi", "internet", "pool", "spa",
        "cuisine", "four", "bain", "douche", "toilette", "piscine",
    )),
)
