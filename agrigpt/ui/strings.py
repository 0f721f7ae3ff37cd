"""Localized UI strings for English, Hindi and Telugu."""

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "हिन्दी",
    "te": "తెలుగు",
}

STRINGS: dict[str, dict[str, str]] = {
    "en": {
        "retake": "Retake",
        "usePhoto": "Use photo",
        "capturePhoto": "Take a photo",
        "uploadPhoto": "Upload a photo",
        "voiceAssistant": "Voice input",
        "inputPlaceholder": "Ask or upload photo...",
        "schemesPlaceholder": "Ask about schemes...",
        "send": "Send",
        "micSupported": "Voice input is not supported in this browser.",
        "voiceError": "Voice recognition error:",
        "imageRejected": "Only images up to {size} MB can be attached.",
        "thinking": "AgriGPT is thinking...",
        "welcome": "Welcome to AgriGPT",
        "welcomeHint": "Ask questions about {topic} or select a suggestion below.",
        "newChat": "New chat",
        "topics": "Topics",
        "signIn": "Sign in",
        "signOut": "Sign out",
        "signedOut": "You are not signed in. Sign in to start chatting.",
    },
    "hi": {
        "retake": "फिर से लें",
        "usePhoto": "फ़ोटो भेजें",
        "capturePhoto": "फ़ोटो खींचें",
        "uploadPhoto": "फ़ोटो अपलोड करें",
        "voiceAssistant": "आवाज़ से लिखें",
        "inputPlaceholder": "पूछें या फ़ोटो अपलोड करें...",
        "schemesPlaceholder": "योजनाओं के बारे में पूछें...",
        "send": "भेजें",
        "micSupported": "इस ब्राउज़र में आवाज़ इनपुट समर्थित नहीं है।",
        "voiceError": "आवाज़ पहचान में त्रुटि:",
        "imageRejected": "केवल {size} MB तक की तस्वीरें जोड़ी जा सकती हैं।",
        "thinking": "AgriGPT सोच रहा है...",
        "welcome": "AgriGPT में आपका स्वागत है",
        "welcomeHint": "{topic} के बारे में पूछें या नीचे दिया गया सुझाव चुनें।",
        "newChat": "नई बातचीत",
        "topics": "विषय",
        "signIn": "साइन इन करें",
        "signOut": "साइन आउट",
        "signedOut": "आप साइन इन नहीं हैं। बातचीत शुरू करने के लिए साइन इन करें।",
    },
    "te": {
        "retake": "మళ్ళీ తీయండి",
        "usePhoto": "ఫోటో పంపండి",
        "capturePhoto": "ఫోటో తీయండి",
        "uploadPhoto": "ఫోటో అప్‌లోడ్ చేయండి",
        "voiceAssistant": "వాయిస్ ఇన్‌పుట్",
        "inputPlaceholder": "అడగండి లేదా ఫోటో అప్‌లోడ్ చేయండి...",
        "schemesPlaceholder": "పథకాల గురించి అడగండి...",
        "send": "పంపండి",
        "micSupported": "ఈ బ్రౌజర్‌లో వాయిస్ ఇన్‌పుట్ అందుబాటులో లేదు.",
        "voiceError": "వాయిస్ గుర్తింపు లోపం:",
        "imageRejected": "{size} MB వరకు ఉన్న చిత్రాలను మాత్రమే జోడించవచ్చు.",
        "thinking": "AgriGPT ఆలోచిస్తోంది...",
        "welcome": "AgriGPT కి స్వాగతం",
        "welcomeHint": "{topic} గురించి అడగండి లేదా క్రింది సూచనను ఎంచుకోండి.",
        "newChat": "కొత్త చాట్",
        "topics": "అంశాలు",
        "signIn": "సైన్ ఇన్",
        "signOut": "సైన్ అవుట్",
        "signedOut": "మీరు సైన్ ఇన్ కాలేదు. చాట్ ప్రారంభించడానికి సైన్ ఇన్ చేయండి.",
    },
}


def translate(key: str, language: str | None = None, **params: object) -> str:
    """Look up ``key`` in ``language``, falling back to English, then the key."""
    table = STRINGS.get(language or DEFAULT_LANGUAGE, STRINGS[DEFAULT_LANGUAGE])
    text = table.get(key) or STRINGS[DEFAULT_LANGUAGE].get(key, key)
    return text.format(**params) if params else text
