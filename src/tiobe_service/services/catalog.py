"""
Static catalog of language descriptions, typical use cases and frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass

from tiobe_service.schemas import Language, LanguageDetail


@dataclass(frozen=True)
class CatalogEntry:
    """Descriptive information about one language."""

    description: str
    use_cases: tuple[str, ...]
    frameworks: tuple[str, ...]


GENERIC_ENTRY = CatalogEntry(
    description="A popular programming language.",
    use_cases=("General-purpose programming",),
    frameworks=("None listed",),
)

_CATALOG: dict[str, CatalogEntry] = {
    "python": CatalogEntry(
        "Python is a high-level, general-purpose language known for its clean, readable syntax.",
        ("Data science", "Machine learning", "Web development", "Automation", "Scientific computing"),
        ("Django", "Flask", "FastAPI", "PyTorch", "TensorFlow", "Pandas"),
    ),
    "c": CatalogEntry(
        "C is a general-purpose procedural language used widely for systems and embedded work.",
        ("Operating systems", "Embedded systems", "Device drivers", "Game engines", "Databases"),
        ("Linux Kernel", "SQLite", "Git", "Nginx"),
    ),
    "c++": CatalogEntry(
        "C++ extends C with object-oriented features and is used for high-performance software.",
        ("Game development", "Systems software", "Browsers", "Databases", "Graphics"),
        ("Qt", "Boost", "Unreal Engine", "OpenCV"),
    ),
    "java": CatalogEntry(
        "Java is an object-oriented language known for running on any platform with a JVM.",
        ("Enterprise applications", "Android development", "Big data", "Cloud", "Microservices"),
        ("Spring", "Hibernate", "Maven", "Gradle", "Apache Kafka"),
    ),
    "c#": CatalogEntry(
        "C# is Microsoft's object-oriented language for the .NET platform.",
        ("Windows applications", "Game development", "Web services", "Enterprise software", "Cloud"),
        (".NET Core", "ASP.NET", "Unity", "Xamarin", "Entity Framework"),
    ),
    "javascript": CatalogEntry(
        "JavaScript is the core language of the web, used on both front end and back end.",
        ("Front-end development", "Back-end development", "Mobile apps", "Desktop apps", "Games"),
        ("React", "Vue.js", "Angular", "Node.js", "Express", "Next.js"),
    ),
    "go": CatalogEntry(
        "Go is a language from Google known for simplicity and strong concurrency support.",
        ("Cloud native", "Microservices", "Network programming", "DevOps tooling", "Blockchain"),
        ("Gin", "Echo", "Kubernetes", "Docker", "Prometheus"),
    ),
    "rust": CatalogEntry(
        "Rust is a systems language focused on safety, concurrency and performance.",
        ("Systems programming", "WebAssembly", "Embedded", "Command-line tools", "Blockchain"),
        ("Actix", "Rocket", "Tokio", "Axum", "Diesel"),
    ),
    "php": CatalogEntry(
        "PHP is a server-side scripting language widely used for web development.",
        ("Web development", "CMS platforms", "E-commerce", "API development", "Blogs"),
        ("Laravel", "Symfony", "WordPress", "Drupal", "Magento"),
    ),
    "r": CatalogEntry(
        "R is a language for statistical computing and graphics.",
        ("Statistics", "Data visualization", "Machine learning", "Bioinformatics", "Finance"),
        ("ggplot2", "dplyr", "tidyr", "Shiny", "caret"),
    ),
    "sql": CatalogEntry(
        "SQL is the standard language for managing relational databases.",
        ("Querying", "Data management", "Reporting", "Data analysis", "ETL"),
        ("MySQL", "PostgreSQL", "Oracle", "SQL Server", "SQLite"),
    ),
    "kotlin": CatalogEntry(
        "Kotlin is a modern JetBrains language with full Java interoperability.",
        ("Android development", "Server-side development", "Cross-platform", "Web development"),
        ("Ktor", "Spring Boot", "Jetpack Compose", "Exposed"),
    ),
    "visual basic": CatalogEntry(
        "Visual Basic is Microsoft's event-driven programming language.",
        ("Windows applications", "Office automation", "Database applications", "Prototyping"),
        ("VB.NET", "VBA", "Visual Studio"),
    ),
    "perl": CatalogEntry(
        "Perl is a high-level, general-purpose interpreted language.",
        ("Text processing", "System administration", "Web development", "Networking", "Bioinformatics"),
        ("Mojolicious", "Dancer", "Catalyst", "CPAN"),
    ),
    "delphi/object pascal": CatalogEntry(
        "Delphi/Object Pascal is an object-oriented dialect of Pascal.",
        ("Desktop applications", "Database applications", "Cross-platform", "Embedded systems"),
        ("FireMonkey", "VCL", "RAD Studio"),
    ),
    "fortran": CatalogEntry(
        "Fortran is one of the oldest high-level languages, used mainly for scientific computing.",
        ("Scientific computing", "Numerical analysis", "HPC", "Weather modelling", "Physics"),
        ("LAPACK", "BLAS", "OpenMP", "MPI"),
    ),
    "matlab": CatalogEntry(
        "MATLAB is a language and environment for numerical computing.",
        ("Numerical computing", "Signal processing", "Image processing", "Control systems", "Deep learning"),
        ("Simulink", "Image Processing Toolbox", "Deep Learning Toolbox"),
    ),
    "ada": CatalogEntry(
        "Ada is a structured, statically typed language for high-integrity systems.",
        ("Aerospace", "Defense", "Railways", "Medical devices", "Embedded systems"),
        ("GNAT", "SPARK", "Ada Web Server"),
    ),
    "assembly language": CatalogEntry(
        "Assembly language is a low-level language that maps directly onto machine code.",
        ("Operating systems", "Device drivers", "Embedded systems", "Reverse engineering", "Optimization"),
        ("NASM", "MASM", "GAS"),
    ),
    "scratch": CatalogEntry(
        "Scratch is a visual programming language aimed at teaching programming.",
        ("Programming education", "Games", "Animation", "Interactive stories"),
        ("Scratch 3.0", "ScratchJr"),
    ),
}

_ALIASES: dict[str, str] = {
    "delphi": "delphi/object pascal",
    "assembly": "assembly language",
}


def lookup(name: str) -> CatalogEntry:
    """Case-insensitive catalog lookup; unknown names get the generic entry."""
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    return _CATALOG.get(key, GENERIC_ENTRY)


def describe(requested_name: str, language: Language) -> LanguageDetail:
    """
    Combine a ranking entry with its catalog entry.

    The catalog is keyed by the name the client asked for, so aliases
    such as "delphi" resolve even when the index spells the name out.
    """
    entry = lookup(requested_name)
    return LanguageDetail(
        name=language.name,
        rank=language.rank,
        rating=language.rating,
        description=entry.description,
        use_cases=list(entry.use_cases),
        frameworks=list(entry.frameworks),
    )
