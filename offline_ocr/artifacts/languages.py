BUILTIN_LANGUAGES: tuple[tuple[str, str], ...] = (
    ("eng", "English"),
    ("deu", "German"),
    ("fra", "French"),
    ("spa", "Spanish"),
    ("ita", "Italian"),
    ("por", "Portuguese"),
    ("rus", "Russian"),
    ("chi_sim", "Chinese (Simplified)"),
    ("jpn", "Japanese"),
    ("ara", "Arabic"),
)
