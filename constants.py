"""Constants and configuration values."""

# Wire names of the five analysis sections
KEY_OBLIGATIONS = "Key Obligations"
RENEWAL_DATES = "Renewal Dates and Deadlines"
RISKS_AND_PENALTIES = "Risks and Penalties"
AUTO_RENEWAL_CLAUSES = "Auto-Renewal Clauses"
RECOMMENDATIONS = "Recommendations for SMEs"

STRING_SECTIONS = (KEY_OBLIGATIONS, RECOMMENDATIONS)
RISK_SECTIONS = (RENEWAL_DATES, RISKS_AND_PENALTIES, AUTO_RENEWAL_CLAUSES)
ANALYSIS_SECTIONS = (
    KEY_OBLIGATIONS,
    RENEWAL_DATES,
    RISKS_AND_PENALTIES,
    AUTO_RENEWAL_CLAUSES,
    RECOMMENDATIONS,
)

# Terms whose presence marks a document as contract-like, each with the
# regex that matches its inflections. Inflections count once per term.
CONTRACT_VOCABULARY = {
    "agreement": r"agreements?",
    "contract": r"contracts?",
    "party": r"part(?:y|ies)",
    "obligation": r"obligations?",
    "termination": r"termination",
    "confidentiality": r"confidentiality",
    "indemnification": r"indemnif(?:ication|y|ies|ied)",
    "liability": r"liabilit(?:y|ies)",
    "governing law": r"governing\s+laws?",
    "jurisdiction": r"jurisdictions?",
    "whereas": r"whereas",
    "hereinafter": r"hereinafter",
    "hereby": r"hereby",
    "warranty": r"warrant(?:y|ies)",
    "breach": r"breach(?:es)?",
    "force majeure": r"force\s+majeure",
    "arbitration": r"arbitration",
    "renewal": r"renewals?",
    "effective date": r"effective\s+date",
    "clause": r"clauses?",
}

EMPLOYMENT_INDICATORS = ("employment", "employee", "employer")

# Caller-facing messages
REJECTION_MESSAGE = (
    "⚠️ This doesn't look like a contract. "
    "Please upload a valid legal contract document (PDF or DOCX)."
)
FAILED_ANALYSIS_MESSAGE = (
    "⚠️ Failed to analyze the contract. The AI response could not be processed, please try again."
)

# Prompt template
ANALYSIS_PROMPT_TEMPLATE = """
You are a legal assistant AI that reviews contracts for small and medium-sized enterprises (SMEs).

STEP 1: Decide whether the document below is a legal contract.
If it is NOT a legal contract, return exactly this JSON and nothing else:
{{"isContract": false, "analysis": "{rejection_message}"}}

STEP 2: If it IS a legal contract, return ONLY a valid JSON object with exactly this structure. Do not add any text, explanation or markdown before or after the JSON.
{{
  "isContract": true,
  "Key Obligations": ["Plain-language description of an obligation"],
  "Renewal Dates and Deadlines": [
    {{ "point": "Date, deadline or notice period", "riskRating": "High | Medium | Low", "reason": "Why this rating applies" }}
  ],
  "Risks and Penalties": [
    {{ "point": "Risk or penalty", "riskRating": "High | Medium | Low", "reason": "Why this rating applies" }}
  ],
  "Auto-Renewal Clauses": [
    {{ "point": "Auto-renewal term", "riskRating": "High | Medium | Low", "reason": "Why this rating applies" }}
  ],
  "Recommendations for SMEs": ["Actionable recommendation"]
}}

RISK RATINGS:
- "High": significant financial, legal or operational consequences.
- "Medium": moderate consequences that deserve attention.
- "Low": minor consequences.
Every item in "Renewal Dates and Deadlines", "Risks and Penalties" and "Auto-Renewal Clauses" MUST include a "reason".
If a section has nothing to report, use an empty list [].

Contract (truncated if too long):
---
{document_text}
---
"""

# Degraded answer used when the model output cannot be parsed and the
# document is an employment contract.
EMPLOYMENT_CONTRACT_ANALYSIS = {
    "isContract": True,
    KEY_OBLIGATIONS: [
        "The employee must perform the duties described in the role and follow reasonable instructions from the employer.",
        "The employer must pay the agreed salary and provide the benefits set out in the agreement.",
        "Both parties must keep confidential business information private during and after employment.",
        "The employee must follow company policies, including working hours and leave rules.",
    ],
    RENEWAL_DATES: [
        {
            "point": "Probation period at the start of employment",
            "riskRating": "Medium",
            "reason": "Employment may be ended on short notice while probation is running.",
        },
        {
            "point": "Notice period required to terminate employment",
            "riskRating": "Medium",
            "reason": "Missing the notice deadline can lead to pay in lieu of notice or a breach claim.",
        },
    ],
    RISKS_AND_PENALTIES: [
        {
            "point": "Breach of confidentiality obligations",
            "riskRating": "High",
            "reason": "Disclosure of confidential information can lead to dismissal and legal action.",
        },
        {
            "point": "Non-compete or non-solicitation restrictions after employment ends",
            "riskRating": "Medium",
            "reason": "Restrictive covenants may limit future work and are enforced differently by jurisdiction.",
        },
        {
            "point": "Termination for misconduct",
            "riskRating": "Low",
            "reason": "Summary dismissal usually applies only to serious, clearly defined misconduct.",
        },
    ],
    AUTO_RENEWAL_CLAUSES: [
        {
            "point": "Employment continues until terminated by either party",
            "riskRating": "Low",
            "reason": "Open-ended employment has no renewal date but requires proper notice to end.",
        },
    ],
    RECOMMENDATIONS: [
        "Confirm the job title, duties, salary and benefits are written down precisely.",
        "Check that notice periods and probation terms are reasonable and equal for both parties.",
        "Review confidentiality and non-compete clauses with a lawyer before signing.",
        "Make sure intellectual property and termination terms comply with local employment law.",
    ],
}
