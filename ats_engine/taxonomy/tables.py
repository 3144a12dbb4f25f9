"""Static term tables shared by the scorers.

Every table is a tuple or a dict of tuples so iteration order, and
therefore every ranking built from it, is stable across runs.
"""
from __future__ import annotations

TOOLS: tuple[str, ...] = (
    # customer support / crm
    "zendesk", "intercom", "freshdesk", "salesforce", "hubspot", "zoho",
    "helpscout", "drift", "crisp", "tawk", "livechat", "olark", "kayako",
    "gorgias", "gladly", "kustomer", "front", "groove", "helpjuice",
    # project management
    "jira", "asana", "trello", "monday", "notion", "clickup", "basecamp",
    "linear", "shortcut", "wrike", "smartsheet", "airtable", "coda",
    # communication
    "slack", "teams", "zoom", "discord", "webex", "google meet", "skype",
    # cloud
    "aws", "azure", "gcp", "google cloud", "heroku", "vercel", "netlify",
    "digitalocean", "cloudflare", "firebase",
    # databases
    "postgresql", "postgres", "mysql", "mongodb", "redis", "elasticsearch",
    "dynamodb", "sqlite", "oracle", "sql server", "snowflake", "bigquery",
    # dev tooling
    "github", "gitlab", "bitbucket", "docker", "kubernetes", "jenkins",
    "circleci", "travis", "terraform", "ansible", "datadog", "splunk",
    "new relic", "sentry", "grafana", "prometheus",
    # design
    "figma", "sketch", "adobe xd", "invision", "zeplin", "miro", "canva",
    # analytics
    "google analytics", "mixpanel", "amplitude", "segment", "heap", "hotjar",
    "fullstory", "tableau", "looker", "power bi", "metabase",
    # marketing / sales
    "marketo", "mailchimp", "sendgrid", "twilio", "stripe", "shopify",
    "magento", "wordpress", "webflow", "squarespace",
    # ai / ml
    "openai", "chatgpt", "claude", "anthropic", "langchain", "huggingface",
    "tensorflow", "pytorch", "scikit-learn", "pandas", "numpy",
)

TECH_SKILLS: tuple[str, ...] = (
    # languages
    "javascript", "typescript", "python", "java", "c#", "c++", "go", "golang",
    "ruby", "php", "swift", "kotlin", "rust", "scala", "r", "perl", "lua",
    "bash", "shell", "powershell", "sql", "graphql", "html", "css", "sass",
    # frontend
    "react", "reactjs", "react.js", "angular", "angularjs", "vue", "vuejs",
    "vue.js", "svelte", "next.js", "nextjs", "nuxt", "gatsby", "remix",
    "jquery", "backbone", "ember",
    # backend
    "node.js", "nodejs", "express", "fastify", "nest.js", "nestjs",
    "django", "flask", "fastapi", "rails", "ruby on rails", "spring",
    "spring boot", "laravel", "symfony", "asp.net", ".net", "dotnet",
    # mobile
    "react native", "flutter", "ionic", "xamarin", "swiftui", "android sdk",
    # data / ml
    "spark", "hadoop", "kafka", "airflow", "dbt", "tableau", "power bi",
    "machine learning", "deep learning", "nlp", "computer vision",
    # infrastructure
    "ci/cd", "devops", "sre", "kubernetes", "k8s", "docker", "aws", "azure",
    "gcp", "linux", "unix", "windows server", "nginx", "apache",
    # apis / protocols
    "rest", "restful", "api", "apis", "grpc", "websocket", "oauth",
    "json", "xml", "yaml",
)

SOFT_SKILLS: tuple[str, ...] = (
    "communication", "written communication", "verbal communication",
    "presentation", "public speaking", "active listening", "empathy",
    "teamwork", "collaboration", "cross-functional", "stakeholder management",
    "problem solving", "critical thinking", "analytical", "troubleshooting",
    "debugging", "root cause analysis",
    "leadership", "mentorship", "coaching", "team management", "delegation",
    "time management", "prioritization", "multitasking", "attention to detail",
    "organization", "planning",
    "customer service", "customer support", "customer success", "client facing",
    "customer experience", "customer satisfaction", "csat", "nps",
    "adaptability", "flexibility", "fast-paced", "startup", "high-growth",
    "agile", "scrum", "remote", "hybrid",
)

COMPOUND_SKILLS: tuple[str, ...] = (
    # support
    "customer support", "customer service", "customer success", "customer experience",
    "technical support", "phone support", "email support", "live chat",
    "ticket management", "ticket resolution", "escalation management",
    "support platforms", "help desk", "service desk",
    # technical
    "workflow automation", "process automation", "task automation",
    "ai-powered", "ai-powered tools", "machine learning", "data analysis",
    "data visualization", "database management", "version control",
    "code review", "unit testing", "integration testing", "test automation",
    # business
    "project management", "product management", "account management",
    "stakeholder management", "vendor management", "change management",
    "risk management", "quality assurance", "quality control",
    # methodologies
    "agile methodology", "scrum methodology", "lean methodology",
    "continuous improvement", "process improvement",
    # environment
    "startup environment", "fast-paced environment", "remote work",
    "hybrid work", "cross-functional team",
)

CERTIFICATIONS: tuple[str, ...] = (
    "aws certified", "azure certified", "google certified", "pmp",
    "scrum master", "csm", "itil", "comptia", "cissp", "cism",
    "hdi", "itil foundation", "itil practitioner",
    "six sigma", "lean six sigma", "green belt", "black belt",
)

REQUIREMENT_INDICATORS: tuple[str, ...] = (
    "required", "must have", "must be", "minimum", "mandatory", "essential",
    "qualifications", "requirements", "you will need", "you should have",
    "experience with", "experience in", "proficiency in", "knowledge of",
    "familiarity with", "background in", "expertise in",
)

DISPLAY_NAMES: dict[str, str] = {
    "aws": "AWS",
    "gcp": "GCP",
    "api": "API",
    "apis": "APIs",
    "sql": "SQL",
    "css": "CSS",
    "html": "HTML",
    "ui": "UI",
    "ux": "UX",
    "ai": "AI",
    "ml": "ML",
    "nlp": "NLP",
    "ci/cd": "CI/CD",
    "csat": "CSAT",
    "nps": "NPS",
    "saas": "SaaS",
    "paas": "PaaS",
    "iaas": "IaaS",
    "react": "React",
    "react.js": "React.js",
    "reactjs": "ReactJS",
    "vue": "Vue",
    "vue.js": "Vue.js",
    "vuejs": "VueJS",
    "angular": "Angular",
    "node.js": "Node.js",
    "nodejs": "Node.js",
    "next.js": "Next.js",
    "nextjs": "Next.js",
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "graphql": "GraphQL",
    "postgresql": "PostgreSQL",
    "postgres": "PostgreSQL",
    "mongodb": "MongoDB",
    "mysql": "MySQL",
    "redis": "Redis",
    "docker": "Docker",
    "kubernetes": "Kubernetes",
    "k8s": "K8s",
    "github": "GitHub",
    "gitlab": "GitLab",
    "bitbucket": "Bitbucket",
    "jira": "Jira",
    "slack": "Slack",
    "zoom": "Zoom",
    "figma": "Figma",
    "zendesk": "Zendesk",
    "salesforce": "Salesforce",
    "hubspot": "HubSpot",
    "shopify": "Shopify",
    "stripe": "Stripe",
    "twilio": "Twilio",
    "linkedin": "LinkedIn",
    "openai": "OpenAI",
    "chatgpt": "ChatGPT",
    "tensorflow": "TensorFlow",
    "pytorch": "PyTorch",
    "c#": "C#",
    "c++": "C++",
    ".net": ".NET",
    "pmp": "PMP",
    "itil": "ITIL",
    "cissp": "CISSP",
    "cism": "CISM",
    "csm": "CSM",
    "hdi": "HDI",
}

UNIVERSAL_SOFT_SKILLS: tuple[str, ...] = (
    "communication",
    "problem solving",
    "problem-solving",
    "analytical",
    "teamwork",
    "collaboration",
    "leadership",
    "attention to detail",
    "time management",
    "organization",
    "adaptability",
    "critical thinking",
)

KNOWN_SKILLS: tuple[str, ...] = (
    "javascript", "typescript", "python", "java", "react", "node", "sql",
    "aws", "docker", "kubernetes", "git", "agile", "scrum", "html", "css",
    "angular", "vue", "mongodb", "postgresql", "redis", "graphql", "rest",
    "tensorflow", "pytorch", "machine learning", "data analysis", "excel",
    "figma", "sketch", "photoshop", "jira", "confluence", "slack",
)

TITLE_SYNONYMS: dict[str, tuple[str, ...]] = {
    "software engineer": ("software developer", "swe", "programmer", "coder", "developer"),
    "frontend engineer": ("frontend developer", "front-end developer", "ui developer", "ui engineer"),
    "backend engineer": ("backend developer", "back-end developer", "server developer"),
    "full stack engineer": ("full stack developer", "fullstack developer", "full-stack engineer"),
    "data scientist": ("data analyst", "ml engineer", "machine learning engineer", "data engineer"),
    "product manager": ("pm", "product owner", "product lead"),
    "project manager": ("program manager", "delivery manager", "scrum master"),
    "devops engineer": ("sre", "site reliability engineer", "platform engineer", "infrastructure engineer"),
    "qa engineer": ("test engineer", "quality assurance", "sdet", "automation engineer"),
    "ux designer": ("ui designer", "product designer", "ux/ui designer", "interaction designer"),
    "data analyst": ("business analyst", "analytics specialist", "bi analyst"),
    "marketing manager": ("marketing lead", "growth manager", "digital marketing manager"),
    "sales representative": ("sales rep", "account executive", "ae", "business development"),
    "customer success": ("customer support", "account manager", "client success"),
    "intern": ("internship", "co-op", "trainee", "associate"),
}

INDUSTRY_TERMS: dict[str, tuple[str, ...]] = {
    "tech": ("saas", "b2b", "b2c", "api", "sdk", "microservices", "cloud", "agile", "scrum", "devops", "ci/cd"),
    "finance": ("fintech", "banking", "trading", "risk", "compliance", "regulatory", "portfolio", "investment"),
    "healthcare": ("hipaa", "ehr", "clinical", "patient", "medical", "pharmaceutical", "fda", "healthcare"),
    "ecommerce": ("marketplace", "retail", "inventory", "fulfillment", "checkout", "cart", "payments"),
    "marketing": ("seo", "sem", "ppc", "analytics", "conversion", "campaign", "brand", "content"),
}

SENIORITY_LEVELS: tuple[str, ...] = (
    "intern", "junior", "associate", "mid-level", "senior", "staff",
    "principal", "lead", "manager", "director", "vp", "head of", "chief",
)

# Broader sector vocabulary used by the semantic domain heuristic.
SECTOR_TERMS: tuple[str, ...] = (
    "healthcare", "fintech", "finance", "banking", "insurance",
    "e-commerce", "retail", "saas", "enterprise", "startup",
    "b2b", "b2c", "manufacturing", "logistics", "education",
    "media", "entertainment", "gaming", "automotive", "aerospace",
    "real estate", "hospitality", "travel", "food", "agriculture",
)

ROLE_TERMS: tuple[str, ...] = (
    "software engineer", "developer", "frontend", "backend", "full stack",
    "data scientist", "data analyst", "machine learning", "ml engineer",
    "product manager", "project manager", "program manager",
    "designer", "ux", "ui", "graphic", "visual",
    "marketing", "sales", "account", "customer success",
    "devops", "sre", "platform", "infrastructure",
    "security", "qa", "test", "quality",
    "manager", "director", "lead", "senior", "staff", "principal",
    "intern", "junior", "associate", "entry level",
)

HIGHLIGHT_TECH_SKILLS: tuple[str, ...] = (
    "python", "javascript", "typescript", "react", "node", "sql", "aws",
    "docker", "kubernetes", "git", "api", "rest", "graphql", "mongodb",
    "postgresql", "redis", "java", "c++", "go", "rust", "scala",
)

ACTION_VERBS: tuple[str, ...] = (
    "achieved", "built", "created", "delivered", "developed", "designed",
    "established", "executed", "generated", "implemented", "improved",
    "increased", "launched", "led", "managed", "optimized", "produced",
    "reduced", "resolved", "spearheaded", "streamlined", "transformed",
)

# Related-concept pairs for offline semantic keyword matching.
CONCEPT_SYNONYMS: dict[str, tuple[str, ...]] = {
    "crm": ("salesforce", "hubspot", "customer relationship management", "zoho"),
    "customer success": ("client success", "account management", "customer satisfaction", "customer experience"),
    "customer support": ("customer service", "help desk", "technical support", "client support"),
    "agile": ("scrum", "sprint", "kanban", "iterative development"),
    "project management": ("pmp", "project coordination", "project lead"),
    "jira": ("atlassian", "issue tracking", "ticket management"),
    "communication": ("interpersonal", "verbal", "written", "presentation"),
    "collaboration": ("teamwork", "cross-functional", "partnership"),
    "javascript": ("ecmascript", "es6", "node.js", "react", "vue"),
    "python": ("django", "flask", "pandas"),
    "sql": ("mysql", "postgresql", "database", "queries"),
    "api": ("rest", "graphql", "web services", "endpoints"),
    "data analysis": ("analytics", "data-driven", "metrics", "reporting"),
    "excel": ("spreadsheets", "google sheets", "pivot tables"),
    "problem solving": ("troubleshooting", "analytical", "solution-oriented"),
    "leadership": ("management", "team lead", "mentoring", "coaching"),
    "attention to detail": ("detail-oriented", "meticulous", "thorough"),
}
