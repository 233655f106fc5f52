"""
Static keyword tables used by the extractor, the bias strategies and the
summary generator.

Latin-script entries are matched on word boundaries; entries in Indic scripts
are matched as plain substrings (see `newslens.core.text.count_phrase`).
"""
from __future__ import annotations

from typing import Dict, List


# ---------------------------------------------------------------------------
# Sentiment
# ---------------------------------------------------------------------------

SENTIMENT_LEXICON: Dict[str, Dict[str, List[str]]] = {
    "English": {
        "positive": [
            "good", "great", "excellent", "positive", "success", "successful",
            "achievement", "progress", "improvement", "improved", "beneficial",
            "effective", "growth", "boost", "welcome", "welcomed", "praised",
            "benefit", "relief", "celebrate", "celebrated", "outstanding",
        ],
        "negative": [
            "bad", "poor", "negative", "failure", "failed", "problem", "issue",
            "crisis", "concern", "decline", "ineffective", "corruption",
            "violence", "protest", "loss", "death", "scam", "delay", "shortage",
            "criticized", "criticised", "attack", "worse",
        ],
    },
    "Hindi": {
        "positive": ["अच्छा", "सफलता", "विकास", "प्रगति", "उत्कृष्ट", "लाभ", "सुधार", "खुशी"],
        "negative": ["बुरा", "संकट", "समस्या", "विफलता", "भ्रष्टाचार", "हिंसा", "नुकसान", "चिंता"],
    },
    "Marathi": {
        "positive": ["चांगले", "यशस्वी", "विकास", "प्रगती", "उत्कृष्ट"],
        "negative": ["वाईट", "संकट", "समस्या", "अपयश", "भ्रष्टाचार"],
    },
    "Tamil": {
        "positive": ["நல்ல", "வெற்றி", "வளர்ச்சி", "முன்னேற்றம்", "சிறந்த"],
        "negative": ["மோசமான", "நெருக்கடி", "பிரச்சனை", "தோல்வி", "ஊழல்"],
    },
    "Telugu": {
        "positive": ["మంచి", "విజయం", "అభివృద్ధి", "ప్రగతి", "అద్భుతం"],
        "negative": ["చెడు", "సంక్షోభం", "సమస్య", "వైఫల్యం", "అవినీతి"],
    },
    "Bengali": {
        "positive": ["ভালো", "সাফল্য", "উন্নয়ন", "অগ্রগতি", "চমৎকার"],
        "negative": ["খারাপ", "সংকট", "সমস্যা", "ব্যর্থতা", "দুর্নীতি"],
    },
    "Gujarati": {
        "positive": ["સારું", "સફળતા", "વિકાસ", "પ્રગતિ", "ઉત્તમ"],
        "negative": ["ખરાબ", "સંકટ", "સમસ્યા", "નિષ્ફળતા", "ભ્રષ્ટાચાર"],
    },
    "Kannada": {
        "positive": ["ಒಳ್ಳೆಯ", "ಯಶಸ್ಸು", "ಅಭಿವೃದ್ಧಿ", "ಪ್ರಗತಿ", "ಅತ್ಯುತ್ತಮ"],
        "negative": ["ಕೆಟ್ಟ", "ಬಿಕ್ಕಟ್ಟು", "ಸಮಸ್ಯೆ", "ವೈಫಲ್ಯ", "ಭ್ರಷ್ಟಾಚಾರ"],
    },
    "Malayalam": {
        "positive": ["നല്ല", "വിജയം", "വികസനം", "പുരോഗതി", "മികച്ച"],
        "negative": ["മോശം", "പ്രതിസന്ധി", "പ്രശ്നം", "പരാജയം", "അഴിമതി"],
    },
}


# ---------------------------------------------------------------------------
# Topics, keywords, entities
# ---------------------------------------------------------------------------

TOPIC_KEYWORDS: Dict[str, List[str]] = {
    "Politics": [
        "election", "parliament", "minister", "opposition", "government",
        "policy", "legislation", "assembly", "चुनाव", "सरकार",
    ],
    "Economy": [
        "economy", "economic", "business", "trade", "market", "finance",
        "budget", "gdp", "investment", "inflation", "अर्थव्यवस्था",
    ],
    "Health": [
        "health", "hospital", "medical", "doctor", "patient", "vaccine",
        "स्वास्थ्य", "சுகாதார", "ఆరోగ్య", "স্বাস্থ্য", "ಆರೋಗ್ಯ", "ആരോഗ്യ",
    ],
    "Education": [
        "education", "school", "university", "student", "teacher",
        "शिक्षा", "शिक्षण", "ಶಿಕ್ಷಣ", "విద్య", "கல்வி", "വിദ്യാഭ്യാസ", "শিক্ষা", "શિક્ષણ",
    ],
    "Technology": ["technology", "digital", "internet", "innovation", "startup", "software"],
    "Agriculture": [
        "agriculture", "farmer", "crop", "harvest", "farming", "किसान",
        "शेतकरी", "ರೈತ", "రైతు", "விவசாயி", "കർഷക", "কৃষক",
    ],
    "Environment": ["environment", "climate", "pollution", "sustainable", "forest", "emission"],
    "Metro/Transport": [
        "metro", "railway", "transport", "traffic", "airport", "मेट्रो",
        "ಮೆಟ್ರೋ", "మెట్రో", "மெட்ரோ", "മെട്രോ", "মেট্রো",
    ],
    "Infrastructure": [
        "infrastructure", "road", "bridge", "construction", "बुनियादी ढांचे",
        "உள்கட்டமைப்பு", "మౌలిక", "অবকাঠামো", "पायाभूत", "ಮೂಲಸೌಕರ್ಯ", "അടിസ്ഥാന സൗകര്യ", "માળખાકીય",
    ],
    "Law and Order": ["police", "crime", "court", "arrest", "verdict", "पुलिस"],
}

STOPWORDS = frozenset([
    "the", "is", "at", "which", "on", "a", "an", "and", "or", "but", "in",
    "with", "to", "for", "of", "as", "by", "that", "this", "it", "from",
    "have", "has", "had", "were", "was", "will", "would", "been", "their",
    "they", "them", "there", "these", "those", "said", "also", "into",
    "than", "then", "what", "when", "where", "about", "after", "over",
])

LOCATION_GAZETTEER = [
    "India", "Delhi", "New Delhi", "Mumbai", "Bengaluru", "Bangalore",
    "Chennai", "Kolkata", "Hyderabad", "Pune", "Ahmedabad", "Jaipur",
    "Lucknow", "Patna", "Bhopal", "Thiruvananthapuram", "Kochi", "Guwahati",
    "Karnataka", "Kerala", "Tamil Nadu", "Telangana", "Andhra Pradesh",
    "Maharashtra", "Gujarat", "Rajasthan", "Punjab", "Haryana", "Bihar",
    "Odisha", "West Bengal", "Assam", "Uttar Pradesh", "Madhya Pradesh",
]

LOCATION_MARKERS = ["State", "District", "City", "Village", "Region", "Pradesh", "Nadu"]

ORGANIZATION_MARKERS = [
    "Ministry", "Department", "Corporation", "Board", "Commission",
    "Authority", "Council", "Court", "Police", "Bank", "University",
]


# ---------------------------------------------------------------------------
# Bias axes (refined strategy)
# ---------------------------------------------------------------------------

PRO_GOVERNMENT = [
    "landmark", "historic", "visionary", "masterstroke", "transformative",
    "flagship", "decisive", "strong leadership", "bold reform", "achievement",
    "welfare scheme", "praised", "lauded", "ऐतिहासिक", "उपलब्धि",
]

ANTI_GOVERNMENT = [
    "failure", "failed", "scam", "corruption", "misrule", "anti-people",
    "dictator", "puppet", "incompetent", "u-turn", "betrayal", "jumla",
    "slammed", "negligence", "भ्रष्टाचार", "विफल",
]

PARTISAN_ENTITIES = [
    "bjp", "congress", "aap", "tmc", "dmk", "aiadmk", "shiv sena", "cpi(m)",
    "bsp", "samajwadi party", "ncp", "jd(u)", "rjd", "ysrcp", "tdp", "brs",
    "nda", "upa", "india bloc", "भाजपा", "कांग्रेस",
]

PRESCRIPTIVE_PHRASES = ["must", "should", "ought to"]

INDIAN_STATES = [
    "andhra pradesh", "arunachal pradesh", "assam", "bihar", "chhattisgarh",
    "goa", "gujarat", "haryana", "himachal pradesh", "jharkhand", "karnataka",
    "kerala", "madhya pradesh", "maharashtra", "manipur", "meghalaya",
    "mizoram", "nagaland", "odisha", "punjab", "rajasthan", "sikkim",
    "tamil nadu", "telangana", "tripura", "uttar pradesh", "uttarakhand",
    "west bengal", "delhi", "jammu and kashmir", "ladakh", "puducherry",
]

URBAN_TERMS = [
    "city", "cities", "urban", "metro", "metropolitan", "town", "municipal",
    "smart city", "downtown", "suburb",
]

RURAL_TERMS = [
    "village", "villages", "rural", "panchayat", "farmer", "farmers",
    "countryside", "tribal", "hamlet", "gram",
]

CHARGED_WORDS = [
    "disaster", "catastrophe", "catastrophic", "horrific", "terrible",
    "horrible", "devastating", "outrageous", "brutal", "shameful", "scandal",
    "chaos", "massacre", "atrocity", "fiasco", "perfect", "brilliant",
    "amazing", "awful", "miracle", "triumph",
]

EMOTIONAL_WORDS = [
    "fear", "anger", "angry", "furious", "heartbreaking", "tragic", "tragedy",
    "shocked", "shocking", "stunned", "terrified", "panic", "grief", "joy",
    "outraged", "tears", "emotional", "चौंकाने वाला",
]

UNVERIFIED_ATTRIBUTION = [
    "allegedly", "reportedly", "rumored", "rumoured", "purportedly",
    "supposedly", "it is believed", "said to be", "कथित",
]

WEAK_SOURCES = [
    "social media", "twitter", "whatsapp", "facebook", "instagram",
    "viral video", "viral post", "forwarded message", "telegram", "youtube",
]

ANONYMOUS_SOURCING = [
    "unnamed source", "unnamed sources", "anonymous", "sources said",
    "sources say", "condition of anonymity", "insider", "confidential source",
    "did not wish to be named",
]

STAKEHOLDER_GROUPS: Dict[str, List[str]] = {
    "government": ["government", "minister", "official", "officials", "ministry"],
    "opposition": ["opposition", "critics", "rival party"],
    "citizens": ["residents", "citizens", "villagers", "locals", "public", "commuters"],
    "experts": ["expert", "experts", "analyst", "analysts", "economist", "researcher", "professor"],
    "business": ["industry", "business", "company", "companies", "traders"],
    "civil_society": ["ngo", "activist", "activists", "union", "association", "civil society"],
}

COUNTERARGUMENT_CONNECTIVES = [
    "however", "but", "although", "though", "on the other hand", "nevertheless",
    "despite", "whereas", "लेकिन", "हालांकि",
]

SENSATIONAL_HEADLINE_WORDS = [
    "shocking", "bombshell", "explosive", "stunning", "sensational", "outrage",
    "chaos", "horror", "slams", "destroys", "exposed", "unbelievable", "mega",
    "सनसनीखेज", "चौंकाने",
]

CLICKBAIT_PATTERNS = [
    r"you won'?t believe",
    r"what happen(?:s|ed) next",
    r"here'?s why",
    r"this is why",
    r"will (?:shock|surprise|amaze) you",
    r"the truth about",
    r"goes viral",
    r"must (?:see|watch|read)",
    r"everyone is talking",
    r"secret.{0,40}revealed",
]


# ---------------------------------------------------------------------------
# Bias axes (baseline strategy): generic category presence
# ---------------------------------------------------------------------------

BASELINE_CATEGORIES: Dict[str, List[str]] = {
    "political": ["party", "election", "minister", "opposition", "ruling", "campaign", "सरकार", "चुनाव"],
    "regional": ["state", "regional", "district", "region", "local", "community"],
    "sentiment": ["crisis", "disaster", "success", "failure", "terrible", "amazing"],
    "source_reliability": ["allegedly", "reportedly", "claim", "sources", "rumour", "rumor"],
    "representation": ["hindu", "muslim", "christian", "sikh", "dalit", "caste", "women", "minority"],
    "language": ["shocking", "outrageous", "stunning", "incredible", "unbelievable", "breaking"],
}


# ---------------------------------------------------------------------------
# Summary generation
# ---------------------------------------------------------------------------

SUMMARY_TOPICS: Dict[str, List[str]] = {
    "metro and urban transport": ["metro", "মেট্রো", "मेट्रो", "ಮೆಟ್ರೋ", "మెట్రో", "மெட்ரோ", "മെട്രോ", "transport", "railway"],
    "agriculture and farmer welfare": ["farmer", "agriculture", "crop", "किसान", "ರೈತ", "రైతు", "விவசாயி", "കർഷക", "शेतकरी"],
    "education and digital learning": ["education", "school", "digital", "शिक्षा", "শিক্ষা", "ಶಿಕ್ಷಣ", "విద్య", "கல்வி", "വിദ്യാഭ്യാസം", "शिक्षण"],
    "infrastructure development": ["infrastructure", "development", "project", "construction", "road", "bridge"],
    "healthcare initiatives": ["health", "hospital", "medical", "healthcare", "doctor", "treatment"],
    "economic policy": ["economy", "budget", "finance", "economic", "investment", "gdp"],
    "government schemes": ["scheme", "policy", "program", "initiative", "योजना", "প্রকল্প", "ಯೋಜನೆ", "పథకం", "திட்டம்", "പദ്ധതി"],
}

SUMMARY_ACTIONS: Dict[str, List[str]] = {
    "Government announces": ["announce", "घोषणा", "ঘোষণা", "ಪ್ರಕಟ", "ప్రకటన", "அறிவிப்பு", "പ്രഖ്യാപനം", "जाहीर"],
    "New initiative launched": ["launch", "inaugurate", "प्रारंभ", "শুরু", "ಪ್ರಾರಂಭ", "ప్రారంభం", "தொடக்கம்", "ആരംഭം"],
    "Development project approved": ["approve", "sanction", "स्वीकृत", "অনুমোদন", "ಅನುಮೋದನೆ", "ఆమోదం", "ஒப்புதல்", "അംഗീകാരം"],
    "Expansion planned": ["expand", "extend", "विस्तार", "সম্প্রসারণ", "ವಿಸ್ತರಣೆ", "విస్తరణ", "விரிவாக்கம்", "വിപുലീകരണം"],
    "Initiative underway": ["underway", "ongoing", "implement"],
}

SUMMARY_LOCATIONS = [
    "Karnataka", "Bangalore", "Bengaluru", "ಕರ್ನಾಟಕ", "ಬೆಂಗಳೂರು",
    "Tamil Nadu", "Chennai", "தமிழகம்", "சென்னை",
    "Telangana", "Hyderabad", "తెలంగాణ", "హైదరాబాద్",
    "Kerala", "Thiruvananthapuram", "കേരളം", "തിരുവനന്തപുരം",
    "Delhi", "दिल्ली", "Uttar Pradesh", "उत्तर प्रदेश",
    "West Bengal", "Kolkata", "পশ্চিমবঙ্গ", "কলকাতা",
    "Maharashtra", "Mumbai", "महाराष्ट्र", "मुंबई",
]

# ---------------------------------------------------------------------------
# Aggregate insights
# ---------------------------------------------------------------------------

INSIGHT_TOPICS: Dict[str, List[str]] = {
    "Metro & Transport": ["metro", "মেট্রো", "मेट्रो", "ಮೆಟ್ರೋ", "మెట్రో", "மெட்ரோ", "മെട്രോ", "transport", "railway", "bus", "road"],
    "Agriculture": ["farmer", "agriculture", "crop", "किसान", "ರೈತ", "రైతు", "விவசாயி", "കർഷക", "शेतकरी", "खेती", "কৃষি"],
    "Education": ["education", "school", "student", "university", "शिक्षा", "শিক্ষা", "ಶಿಕ್ಷಣ", "విద్య", "கல்வி", "വിദ്യാഭ്യാസം", "शिक्षण"],
    "Healthcare": ["health", "hospital", "medical", "doctor", "स्वास्थ्य", "স্বাস্থ্য", "ಆರೋಗ್ಯ", "ఆరోగ్యం", "சுகாதாரம்", "ആരോഗ്യം"],
    "Infrastructure": ["infrastructure", "development", "project", "construction", "road", "bridge", "building"],
    "Government Schemes": ["scheme", "योजना", "প্রকল্প", "ಯೋಜನೆ", "పథకం", "திட்டம்", "പദ്ധതി", "policy", "welfare"],
    "Economy": ["economy", "budget", "finance", "investment", "economic", "gdp", "crore", "lakh"],
    "Technology": ["digital", "technology", "online", "internet", "software", "tech"],
    "Environment": ["environment", "pollution", "climate", "green", "clean", "eco"],
    "Employment": ["job", "employment", "unemployment", "work", "career", "रोजगार", "வேலை", "ఉద్యోగం"],
}

INSIGHT_THEMES = [
    "announcement", "launch", "inauguration", "expansion", "development",
    "welfare", "scheme", "initiative", "project", "improvement",
    "modernization", "upgrade", "investment", "funding", "budget",
]

INSIGHT_POSITIVE = [
    "improve", "better", "success", "growth", "development", "progress",
    "benefit", "welfare", "advance", "enhance", "upgrade", "modernize",
]

INSIGHT_NEGATIVE = [
    "crisis", "problem", "issue", "delay", "failure", "concern",
    "challenge", "difficulty", "shortage", "decline",
]
