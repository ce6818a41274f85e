"""
Deterministic fallback content for every topic slot.

Builders append these when the prompt text yields fewer than two usable
items. Canned subtopics are `(name, relation, ((detail, relation), ...))`.
"""

from types import MappingProxyType

from promptmap.schemas.mindmap import Domain

# ── Task Types (how-to prompts) ──────────────────────────────────────────────

COOKING = "cooking"
BUILDING = "building"
FIXING = "fixing"
LEARNING = "learning"
WRITING = "writing"
INSTALLATION = "installation"
GENERAL = "general"

# First matching row wins.
TASK_CUES = (
    (COOKING, ("cook", "bake", "recipe", "food")),
    (BUILDING, ("build", "make", "create", "construct")),
    (FIXING, ("fix", "repair", "solve", "troubleshoot")),
    (LEARNING, ("learn", "study", "understand", "master")),
    (WRITING, ("write", "draft", "compose")),
    (INSTALLATION, ("install", "setup", "configure", "deploy")),
)

LOGICAL_STEPS = MappingProxyType({
    COOKING: (
        ("Gather ingredients", "start with",
         (("Check quantities", "ensuring"), ("Prepare substitutions", "if needed"))),
        ("Prepare ingredients", "then",
         (("Wash and clean", "first"), ("Cut and measure", "precisely"))),
        ("Combine and cook", "next",
         (("Follow recipe order", "carefully"), ("Monitor temperature", "constantly"))),
        ("Finish and serve", "finally",
         (("Check doneness", "by testing"), ("Plate presentation", "considering"))),
    ),
    BUILDING: (
        ("Gather materials and tools", "start with",
         (("Check inventory", "against"), ("Prepare workspace", "by clearing"))),
        ("Prepare components", "then",
         (("Measure twice", "before cutting"), ("Pre-assemble sections", "when possible"))),
        ("Assemble main structure", "next",
         (("Follow blueprint", "precisely"), ("Secure connections", "firmly"))),
        ("Finish and test", "finally",
         (("Add finishing touches", "carefully"), ("Test functionality", "thoroughly"))),
    ),
    FIXING: (
        ("Identify the problem", "start with",
         (("Observe symptoms", "carefully"), ("Gather information", "systematically"))),
        ("Diagnose root cause", "then",
         (("Test hypotheses", "methodically"), ("Isolate variables", "one by one"))),
        ("Implement solution", "next",
         (("Gather necessary tools", "before starting"), ("Follow repair sequence", "step by step"))),
        ("Test and verify", "finally",
         (("Check functionality", "thoroughly"), ("Monitor for recurrence", "over time"))),
    ),
    LEARNING: (
        ("Set clear goals", "start with",
         (("Define objectives", "specifically"), ("Create timeline", "realistically"))),
        ("Gather resources", "then",
         (("Find quality materials", "from reliable sources"), ("Organize study environment", "for focus"))),
        ("Study systematically", "next",
         (("Use active learning", "not just reading"), ("Take effective notes", "for review"))),
        ("Practice and apply", "finally",
         (("Test knowledge", "regularly"), ("Teach others", "to reinforce"))),
    ),
    GENERAL: (
        ("Preparation", "start with",
         (("Gather requirements", "completely"), ("Plan approach", "strategically"))),
        ("Initial steps", "then",
         (("Begin basics", "methodically"), ("Establish foundation", "solidly"))),
        ("Main process", "next",
         (("Execute core tasks", "carefully"), ("Monitor progress", "continuously"))),
        ("Completion", "finally",
         (("Verify results", "thoroughly"), ("Make adjustments", "as needed"))),
    ),
})

REQUIREMENTS = MappingProxyType({
    COOKING: (
        ("Ingredients", "requires",
         (("Fresh components", "for quality"), ("Proper quantities", "measured accurately"))),
        ("Kitchen equipment", "needs",
         (("Essential tools", "such as"), ("Optional gadgets", "for convenience"))),
    ),
    BUILDING: (
        ("Materials", "requires",
         (("Quality components", "for durability"), ("Correct specifications", "matching plans"))),
        ("Tools", "needs",
         (("Essential equipment", "such as"), ("Safety gear", "for protection"))),
    ),
    FIXING: (
        ("Diagnostic tools", "requires",
         (("Testing equipment", "for assessment"), ("Reference materials", "for guidance"))),
        ("Repair supplies", "needs",
         (("Replacement parts", "matching specifications"), ("Repair tools", "appropriate for task"))),
    ),
    GENERAL: (
        ("Essential resources", "requires",
         (("Primary materials", "for core tasks"), ("Supporting elements", "for completion"))),
        ("Knowledge prerequisites", "needs",
         (("Basic understanding", "of fundamentals"), ("Key concepts", "to comprehend"))),
    ),
})

BEST_PRACTICES = MappingProxyType({
    COOKING: (
        ("Preparation tips", "improves with",
         (("Mise en place", "organizing before starting"), ("Ingredient handling", "for best results"))),
        ("Cooking techniques", "enhanced by",
         (("Temperature control", "maintaining properly"), ("Timing precision", "watching carefully"))),
    ),
    BUILDING: (
        ("Planning advice", "benefits from",
         (("Detailed blueprints", "following closely"), ("Material allowances", "accounting for waste"))),
        ("Construction techniques", "improved with",
         (("Proper measurements", "checking twice"), ("Quality joints", "ensuring strength"))),
    ),
    GENERAL: (
        ("Efficiency strategies", "optimized by",
         (("Time management", "prioritizing tasks"), ("Resource allocation", "using wisely"))),
        ("Quality assurance", "maintained through",
         (("Regular checks", "throughout process"), ("Attention to detail", "at every stage"))),
    ),
})

CHALLENGES = MappingProxyType({
    COOKING: (
        ("Common mistakes", "to avoid",
         (("Improper measurements", "leading to"), ("Temperature issues", "resulting in"))),
        ("Troubleshooting", "solutions for",
         (("Texture problems", "fixed by"), ("Flavor adjustments", "corrected with"))),
    ),
    BUILDING: (
        ("Structural issues", "to prevent",
         (("Alignment problems", "causing"), ("Stability concerns", "addressed by"))),
        ("Material challenges", "overcome by",
         (("Quality variations", "managed through"), ("Compatibility issues", "resolved with"))),
    ),
    GENERAL: (
        ("Common obstacles", "to overcome",
         (("Frequent problems", "encountered during"), ("Typical setbacks", "managed by"))),
        ("Error prevention", "strategies for",
         (("Critical checkpoints", "established at"), ("Verification methods", "implemented through"))),
    ),
})

BENEFITS = (
    ("Primary benefits", "results in",
     (("Main advantage", "providing"), ("Key outcome", "achieving"))),
    ("Secondary benefits", "also provides",
     (("Additional value", "offering"), ("Long-term impact", "creating"))),
)

# ── Concept Slots ────────────────────────────────────────────────────────────

COMPONENTS = ("Primary Element", "Secondary Component", "Supporting Structure")

EXAMPLES = MappingProxyType({
    Domain.TECHNOLOGY: ("Smartphone application", "Cloud computing service", "Machine learning algorithm"),
    Domain.SCIENCE: ("Laboratory experiment", "Research study", "Scientific theory"),
    Domain.BUSINESS: ("Startup company", "Marketing strategy", "Business model"),
    Domain.EDUCATION: ("Online course", "Teaching method", "Learning assessment"),
    Domain.HEALTH: ("Treatment protocol", "Wellness program", "Medical procedure"),
    Domain.GENERAL: ("Practical application", "Real-world case", "Common instance"),
})

APPLICATIONS = MappingProxyType({
    Domain.TECHNOLOGY: ("Software development", "Data analysis", "Automation systems"),
    Domain.SCIENCE: ("Research methodology", "Experimental design", "Theoretical modeling"),
    Domain.BUSINESS: ("Strategic planning", "Market analysis", "Operational efficiency"),
    Domain.EDUCATION: ("Curriculum development", "Student assessment", "Educational technology"),
    Domain.HEALTH: ("Patient care", "Diagnostic procedures", "Treatment planning"),
    Domain.GENERAL: ("Practical implementation", "Real-world usage", "Common application"),
})

ADVANTAGES = (
    "Improves efficiency and effectiveness",
    "Enhances quality and reliability",
    "Provides better results with less effort",
)

LIMITATIONS = (
    "May require specialized knowledge or training",
    "Can be resource-intensive in some contexts",
    "Not universally applicable to all situations",
)

# ── Formula Slots ────────────────────────────────────────────────────────────

DEFAULT_FORMULA = "f(x) = result"

SYMBOL_MEANINGS = MappingProxyType({
    "x": "Input value",
    "y": "Output value",
    "t": "Time",
    "v": "Velocity",
    "a": "Acceleration",
    "m": "Mass",
    "f": "Force",
    "e": "Energy",
    "p": "Pressure",
    "r": "Radius",
})

DEFAULT_VARIABLES = (
    ("x", "Input variable", "units"),
    ("y", "Output variable", "units"),
    ("k", "Constant factor", ""),
)

CALCULATION_STEPS = (
    "Identify all variables in the formula",
    "Substitute known values into the equation",
    "Perform the mathematical operations in the correct order",
    "Verify the result and check the units",
)

FORMULA_APPLICATIONS = MappingProxyType({
    Domain.MATH: ("Mathematical problem solving", "Algebraic calculations", "Geometric analysis"),
    Domain.SCIENCE: ("Motion analysis", "Force calculations", "Energy transformations"),
    Domain.BUSINESS: ("Investment analysis", "Risk assessment", "Financial forecasting"),
    Domain.GENERAL: ("Practical calculations", "Quantitative analysis", "Predictive modeling"),
})

FORMULA_CONSTRAINTS = (
    "Valid only within specific parameter ranges",
    "Assumes ideal conditions",
    "Neglects certain real-world factors",
)

# ── Comparison Slots ─────────────────────────────────────────────────────────


def similarities(item1: str, item2: str):
    return (
        f"Both {item1} and {item2} serve similar purposes",
        "Both have overlapping features and capabilities",
        "Share common underlying principles",
    )


def differences(item1: str, item2: str):
    return (
        f"{item1} focuses on X, while {item2} emphasizes Y",
        f"{item1} is typically more A, whereas {item2} is more B",
        "They differ in their approach to key functionality",
    )


# ── Problem / Solution Slots ─────────────────────────────────────────────────

PROBLEM_CAUSES = ("Underlying technical issues", "Configuration problems", "Resource limitations")
SYMPTOMS = ("Error messages appearing", "System performance degradation", "Unexpected behavior")
SOLUTIONS = ("Update system components", "Reconfigure settings", "Implement workaround")
PREVENTION = (
    "Regular maintenance and updates",
    "Proper configuration practices",
    "Monitoring and early detection",
)
LONG_TERM_STRATEGIES = (
    "Implement comprehensive monitoring system",
    "Develop standardized procedures",
    "Invest in training and documentation",
)

# ── List Slots ───────────────────────────────────────────────────────────────

LIST_ITEMS = ("Type 1", "Type 2", "Type 3", "Type 4", "Type 5")
SELECTION_CRITERIA = (
    "Functionality and features",
    "Cost and resource requirements",
    "Compatibility with existing systems",
)

# ── Cause / Effect Slots ─────────────────────────────────────────────────────

DETAILED_CAUSES = MappingProxyType({
    Domain.HEALTH: ("Biological factors", "Environmental exposure", "Lifestyle choices"),
    Domain.TECHNOLOGY: ("Software configuration", "Hardware limitations", "User interaction patterns"),
    Domain.BUSINESS: ("Market conditions", "Strategic decisions", "Competitive pressures"),
    Domain.GENERAL: ("Primary factor", "Secondary influence", "Contributing element"),
})

DETAILED_EFFECTS = MappingProxyType({
    Domain.HEALTH: ("Symptoms manifestation", "Physiological changes", "Quality of life impact"),
    Domain.TECHNOLOGY: ("System performance", "User experience", "Data integrity"),
    Domain.BUSINESS: ("Profitability changes", "Market position shifts", "Operational efficiency"),
    Domain.GENERAL: ("Primary outcome", "Secondary consequence", "Long-term impact"),
})

MECHANISMS = ("Direct interaction pathway", "Sequential process flow", "Feedback loop system")
INFLUENCING_FACTORS = ("Environmental conditions", "System parameters", "External variables")
CAUSE_EFFECT_EXAMPLES = ("Real-world scenario", "Common occurrence", "Documented case study")

# ── Definition Slots ─────────────────────────────────────────────────────────

CHARACTERISTICS = ("Distinctive features", "Core properties", "Defining attributes")
RELATED_CONCEPTS = (
    ("Broader category", "part of"),
    ("Similar idea", "similar to"),
    ("Opposing idea", "contrasts with"),
)

# ── Collaborator Fallbacks (assisted concept builder) ────────────────────────

_TECHNOLOGY_INFO = MappingProxyType({
    "definition": "a set of tools, methods, and processes used to solve problems or achieve objectives",
    "core": "The practical application of knowledge to address specific challenges",
    "components": (
        ("Hardware", "Physical components and devices that make up systems"),
        ("Software", "Programs and applications that run on hardware"),
        ("Infrastructure", "Underlying systems that support technological operations"),
    ),
    "examples": ("Artificial Intelligence", "Cloud Computing", "Mobile Applications"),
    "applications": (
        ("Business Operations", "Streamlining processes and improving efficiency"),
        ("Communication", "Enabling faster and more effective information exchange"),
        ("Data Analysis", "Processing large volumes of information for insights"),
    ),
    "advantages": ("Increased Efficiency", "Improved Accuracy", "Enhanced Scalability"),
    "limitations": ("Technical Complexity", "Implementation Costs", "Security Vulnerabilities"),
})

_BUSINESS_INFO = MappingProxyType({
    "definition": "organizational activities focused on commercial, industrial, or professional operations",
    "core": "The creation and exchange of goods, services, or value in a marketplace",
    "components": (
        ("Strategy", "Long-term planning and direction for achieving objectives"),
        ("Operations", "Day-to-day activities that deliver products or services"),
        ("Finance", "Management of monetary resources and investments"),
    ),
    "examples": ("E-commerce", "Manufacturing", "Consulting Services"),
    "applications": (
        ("Market Expansion", "Growing into new customer segments or regions"),
        ("Product Development", "Creating new offerings to meet customer needs"),
        ("Customer Relationship Management", "Building and maintaining client connections"),
    ),
    "advantages": ("Revenue Generation", "Market Influence", "Economic Growth"),
    "limitations": ("Market Competition", "Regulatory Constraints", "Resource Dependencies"),
})

_SCIENCE_INFO = MappingProxyType({
    "definition": "systematic study of the structure and behavior of the physical and natural world",
    "core": "The pursuit of knowledge through observation, experimentation, and theoretical explanation",
    "components": (
        ("Research Methods", "Systematic approaches to investigating phenomena"),
        ("Empirical Evidence", "Data collected through observation and experimentation"),
        ("Theoretical Frameworks", "Conceptual structures that explain observations"),
    ),
    "examples": ("Physics", "Biology", "Chemistry"),
    "applications": (
        ("Medical Advancements", "Improving healthcare and treatment options"),
        ("Environmental Management", "Understanding and protecting natural systems"),
        ("Technological Innovation", "Developing new tools and capabilities"),
    ),
    "advantages": ("Knowledge Advancement", "Problem Solving", "Innovation Enablement"),
    "limitations": ("Methodological Constraints", "Funding Challenges", "Ethical Considerations"),
})

_DOMAIN_INFO = MappingProxyType({
    Domain.TECHNOLOGY: _TECHNOLOGY_INFO,
    Domain.BUSINESS: _BUSINESS_INFO,
    Domain.SCIENCE: _SCIENCE_INFO,
})


def concept_info(domain: Domain, concept: str):
    """Fallback content for one assisted concept build, flavoured by domain."""
    info = _DOMAIN_INFO.get(domain)
    if info is not None:
        return info
    return MappingProxyType({
        "definition": f"a concept or system related to {concept}",
        "core": f"The fundamental essence of {concept} and its primary purpose",
        "components": (
            ("Primary Element", f"The most essential aspect of {concept}"),
            ("Supporting Structure", f"Elements that enhance {concept}"),
            ("Operational Mechanisms", f"Processes that enable {concept} to function"),
        ),
        "examples": ("Practical Application", "Real-world Example", "Common Instance"),
        "applications": (
            ("Primary Use Case", f"The most common implementation of {concept}"),
            ("Secondary Application", f"Alternative way {concept} is applied"),
            ("Emerging Utilization", f"New and developing application of {concept}"),
        ),
        "advantages": ("Increased Efficiency", "Improved Quality", "Enhanced Flexibility"),
        "limitations": ("Resource Requirements", "Implementation Complexity", "Potential Drawbacks"),
    })
