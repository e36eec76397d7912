"""Tables driving profile tag derivation.

Category caps follow the priority order in which tags are emitted:
seniority, technology, industry, role, domain, education, language, work style.
"""

from __future__ import annotations

MAX_TAGS = 20
MAX_SENIORITY_TAGS = 2
MAX_TECHNOLOGY_TAGS = 6
MAX_INDUSTRY_TAGS = 3
MAX_ROLE_TAGS = 2
MAX_DOMAIN_TAGS = 3
MAX_EDUCATION_TAGS = 1
MAX_LANGUAGE_TAGS = 2
MAX_WORK_STYLE_TAGS = 2

DEFAULT_TECHNOLOGY_PRIORITY = 50
DOMAIN_HIT_THRESHOLD = 2

# Title words that upgrade a long career to principal/executive.
LEADERSHIP_TITLE_PATTERN = r"\b(lead|head|director|vp|chief|manager|principal)\b"

TECHNOLOGY_PRIORITY: dict[str, int] = {
    # Languages
    "python": 100,
    "javascript": 100,
    "typescript": 95,
    "java": 90,
    "go": 85,
    "rust": 85,
    "c++": 80,
    "c#": 80,
    "ruby": 75,
    "php": 70,
    "swift": 75,
    "kotlin": 75,
    # Frameworks
    "react": 100,
    "vue": 90,
    "angular": 85,
    "next.js": 85,
    "nextjs": 85,
    "node.js": 95,
    "nodejs": 95,
    "django": 85,
    "flask": 75,
    "spring": 80,
    "rails": 75,
    ".net": 80,
    "express": 70,
    "fastapi": 75,
    # Cloud and infrastructure
    "aws": 100,
    "azure": 90,
    "gcp": 85,
    "docker": 90,
    "kubernetes": 90,
    "k8s": 90,
    "terraform": 80,
    "jenkins": 70,
    "gitlab": 70,
    "github actions": 70,
    # Data
    "postgresql": 85,
    "mysql": 80,
    "mongodb": 85,
    "redis": 75,
    "elasticsearch": 75,
    "tensorflow": 85,
    "pytorch": 85,
    "pandas": 70,
    "spark": 80,
    "sql": 90,
    # Design and business tools
    "figma": 80,
    "sketch": 70,
    "jira": 60,
    "salesforce": 80,
    "sap": 75,
}

INDUSTRY_TAGS: dict[str, str] = {
    "technology": "tech",
    "tech": "tech",
    "it": "tech",
    "information technology": "tech",
    "software": "tech",
    "finance": "finance",
    "financial services": "finance",
    "banking": "finance",
    "bank": "finance",
    "fintech": "fintech",
    "healthcare": "healthcare",
    "health": "healthcare",
    "santé": "healthcare",
    "consulting": "consulting",
    "management consulting": "consulting",
    "conseil": "consulting",
    "e-commerce": "e-commerce",
    "ecommerce": "e-commerce",
    "retail / e-commerce": "e-commerce",
    "retail": "retail",
    "media": "media",
    "media / entertainment": "media",
    "entertainment": "media",
    "education": "education",
    "edtech": "edtech",
    "manufacturing": "manufacturing",
    "industrie": "manufacturing",
    "energy": "energy",
    "énergie": "energy",
    "transportation": "transportation",
    "logistics": "logistics",
    "logistique": "logistics",
    "real estate": "real-estate",
    "immobilier": "real-estate",
    "insurance": "insurance",
    "assurance": "insurance",
    "telecommunications": "telecom",
    "telecom": "telecom",
    "gaming": "gaming",
    "startup": "startup",
    "saas": "saas",
    "b2b": "b2b",
    "b2c": "b2c",
}

# Ordered (pattern, tag) pairs matched against a lowercased job title; the
# first two distinct tags win.
ROLE_PATTERNS: tuple[tuple[str, str], ...] = (
    # Engineering
    (r"(software|backend|frontend|full[- ]?stack|web|mobile|ios|android)\s*(engineer|developer|dev)", "engineer"),
    (r"\bengineer", "engineer"),
    (r"\bdevelop", "developer"),
    (r"\barchitect", "architect"),
    (r"\bdevops\b", "devops"),
    (r"\bsre\b|site reliability", "sre"),
    (r"\bplatform\b", "platform"),
    # Data
    (r"data\s*(scientist|analyst|engineer)", "data"),
    (r"machine learning|\bml\s*engineer", "machine-learning"),
    (r"\bdata\b", "data"),
    (r"\banalytics?\b|\banalyst\b", "analytics"),
    (r"\bbi\b|business intelligence", "bi"),
    # Product and design
    (r"product\s*(manager|owner|lead)", "product"),
    (r"\bpm\b", "product"),
    (r"\b(ux|ui)\b|design", "design"),
    (r"\bdesigner\b", "designer"),
    # Management
    (r"engineering\s*manager", "engineering-manager"),
    (r"tech\s*lead", "tech-lead"),
    (r"team\s*lead", "team-lead"),
    (r"\bmanager\b", "manager"),
    (r"\bdirector\b|\bdirecteur\b", "director"),
    (r"head of", "head"),
    (r"\bvp\b|vice president", "vp"),
    (r"\bcto\b|chief technology", "cto"),
    (r"\bceo\b|chief executive", "ceo"),
    # Other
    (r"consultant", "consultant"),
    (r"\bsales\b|commercial", "sales"),
    (r"marketing", "marketing"),
    (r"\bhr\b|human resources|ressources humaines", "hr"),
    (r"recruit", "recruiter"),
    (r"operations", "operations"),
    (r"project\s*manager|chef de projet", "project-manager"),
    (r"scrum\s*master", "scrum-master"),
    (r"agile\s*coach", "agile-coach"),
    (r"\bqa\b|quality assurance|\btest", "qa"),
    (r"security|sécurité", "security"),
    (r"sysadmin|system administrator", "sysadmin"),
)

DOMAIN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "frontend": (
        "react",
        "vue",
        "angular",
        "svelte",
        "css",
        "sass",
        "tailwind",
        "html",
        "next.js",
        "nextjs",
        "gatsby",
        "frontend",
        "front-end",
    ),
    "backend": (
        "node",
        "django",
        "flask",
        "spring",
        "rails",
        "express",
        ".net",
        "laravel",
        "fastapi",
        "backend",
        "back-end",
        "api",
    ),
    "devops": (
        "docker",
        "kubernetes",
        "k8s",
        "terraform",
        "ansible",
        "jenkins",
        "ci/cd",
        "aws",
        "azure",
        "gcp",
        "devops",
        "cloud",
        "infrastructure",
    ),
    "mobile": ("ios", "android", "swift", "kotlin", "react native", "flutter", "mobile"),
    "data": (
        "pandas",
        "numpy",
        "spark",
        "hadoop",
        "sql",
        "tableau",
        "power bi",
        "data analysis",
        "data engineering",
        "etl",
    ),
    "machine-learning": (
        "tensorflow",
        "pytorch",
        "scikit",
        "machine learning",
        "deep learning",
        "nlp",
        "ai",
        "ml",
    ),
    "security": (
        "security",
        "cybersecurity",
        "penetration",
        "encryption",
        "owasp",
        "soc",
        "siem",
    ),
}

# Emission order after the frontend/backend/full-stack decision.
SECONDARY_DOMAINS = ("devops", "mobile", "data", "machine-learning", "security")

DEGREE_PRIORITY: dict[str, int] = {
    "phd": 100,
    "doctorate": 100,
    "master": 80,
    "mba": 80,
    "bachelor": 60,
    "associate": 40,
    "bootcamp": 30,
    "high-school": 20,
    "other": 10,
}

DEGREE_TAGS: dict[str, str] = {
    "phd": "phd",
    "doctorate": "phd",
    "master": "masters-degree",
    "mba": "mba",
    "bachelor": "bachelors-degree",
    "associate": "associate-degree",
    "bootcamp": "bootcamp",
    "high-school": "high-school",
}

LANGUAGE_LEVEL_PRIORITY: dict[str, int] = {
    "native": 100,
    "fluent": 80,
    "professional": 70,
    "intermediate": 50,
    "beginner": 20,
}

# Only these levels are strong enough to be advertised as a tag.
TAGGED_LANGUAGE_LEVELS = frozenset({"native", "fluent"})

WORK_PREFERENCE_TAGS: dict[str, str] = {
    "remote": "remote",
    "hybrid": "hybrid",
    "onsite": "onsite",
    "on-site": "onsite",
    "office": "onsite",
}

ENVIRONMENT_TAGS: dict[str, str] = {
    "startup": "startup",
    "scale-up": "scale-up",
    "scaleup": "scale-up",
    "corporate": "enterprise",
    "enterprise": "enterprise",
}

PEOPLE_MANAGEMENT_TEAM_SIZE = 10
