"""Property names of the director's Notion tables.

These are the column names configured in the workspace; the record
writer checks each one against the discovered schema before writing.
"""

# Shared
DATE = "Date"
STATUS = "Statut"
DOMAIN = "Domaine"

# JOURNAL_AGENT_DIRECTEUR
JOURNAL_RESULT = "Résultat produit"
JOURNAL_DECISION = "Décision prise"
JOURNAL_NEXT_ACTION = "Prochaine action"
JOURNAL_AGENTS = "Agents mobilisés"
JOURNAL_FALLBACK_TITLE = "Run IA"
DIRECTOR_AGENT_OPTION = "Directeur"

# DOCTRINE_VIVANTE
DOCTRINE_CONTENT = "Contenu"
DOCTRINE_VERSION = "Version"
DOCTRINE_TYPE = "Type"
DOCTRINE_ACTIVE = "Actif"

# DECISIONS_STRATEGIQUES
DECISION_JUSTIFICATION = "Justification"
DECISION_IMPACT = "Impact"

# PROJETS
PROJECT_OBJECTIVE = "Objectif"
PROJECT_PRIORITY = "Priorité"
