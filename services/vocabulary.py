# Skill phrases matched against job descriptions. Lower-case, checked by
# substring containment, so keep multi-word phrases intact.
LOGISTICS_SKILLS = (
    "gps tracking",
    "fleet management",
    "route optimization",
    "supply chain management",
    "inventory management",
    "logistics planning",
    "vehicle tracking",
    "warehouse management",
    "transportation management",
    "driver management",
    "fuel management",
    "maintenance scheduling",
    "compliance",
    "safety regulations",
    "dot regulations",
    "international fuel tax agreement",
    "communication",
    "problem solving",
    "leadership",
    "team management",
    "data analysis",
)
