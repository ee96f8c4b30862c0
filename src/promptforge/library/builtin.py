"""Built-in seed templates."""

from typing import List

from ..core.types import Template


BUILTIN_TEMPLATES: List[Template] = [
    # System & helper
    Template(
        id="t1",
        name="Chain of Thought (CoT)",
        description="Encourages the model to think step-by-step before answering.",
        category="System",
        tags=["reasoning", "logic"],
        content="""You are an expert problem solver.

Task: {{task_description}}

Instructions:
1. Break down the problem into smaller, manageable components.
2. Analyze each component individually.
3. Synthesize your findings to form a comprehensive solution.
4. Provide the final answer clearly.

Let's think step by step.""",
    ),
    Template(
        id="t9",
        name="Prompt Creator (Meta-Prompt)",
        description="Helps you build a better prompt for another task.",
        category="System",
        tags=["meta", "helper"],
        content="""You are an Expert Prompt Engineer.

I need a prompt to achieve the following goal:
{{goal}}

Please write a highly optimized prompt that I can copy and paste into an LLM.
The generated prompt should:
- Assign a clear role/persona.
- Define specific constraints and rules.
- Include placeholders for dynamic data if needed (using {{variable}} syntax).
- Use best practices like Chain of Thought or delimiter usage.""",
    ),
    Template(
        id="t4",
        name="Socratic Tutor",
        description="Guides the user to the answer through questions.",
        category="Education",
        tags=["education", "learning"],
        content="""You are a Socratic Tutor.

The user wants to learn about: {{topic}}

Do not give the answer directly. Instead:
1. Ask probing questions to gauge the user's current understanding.
2. Guide them to the solution through a series of logical steps.
3. Encourage critical thinking.
4. Be patient and encouraging.""",
    ),
    Template(
        id="t6",
        name="ELI5 (Explain Like I'm 5)",
        description="Simplifies complex topics for easy understanding.",
        category="Education",
        tags=["education", "simplification"],
        content="""Explain the following topic so that a five-year-old could understand it:
{{complex_topic}}

Guidelines:
- Use simple analogies and everyday language.
- Avoid jargon and technical terms.
- Keep sentences short and engaging.
- Focus on the "big picture" rather than minute details.""",
    ),

    # Coding & technical
    Template(
        id="t2",
        name="Persona: Senior Engineer",
        description="Adopts the persona of a senior software engineer.",
        category="Coding",
        tags=["coding", "roleplay"],
        content="""Act as a World-Class Senior Software Engineer and Architect.

Your goal is to provide a robust, scalable, and maintainable solution for the following request:
{{code_request}}

Guidelines:
- Prioritize clean code principles (SOLID, DRY).
- Consider edge cases and error handling.
- Suggest specific libraries or patterns if applicable.
- If providing code, use TypeScript unless specified otherwise.
- Explain your reasoning for architectural decisions.""",
    ),
    Template(
        id="t7",
        name="Python Bug Fixer",
        description="Specialized template for debugging Python code.",
        category="Coding",
        tags=["coding", "debugging", "python"],
        content="""You are an expert Python Developer. I have some code that is causing an issue.

The Code:
```python
{{broken_code}}
```

The Error/Issue:
{{error_message}}

Please:
1. Identify the root cause of the bug.
2. Explain why it is happening.
3. Provide the corrected code block.
4. Suggest how to prevent this in the future.""",
    ),
    Template(
        id="t11",
        name="React Component Generator",
        description="Generates clean, modern React components.",
        category="Coding",
        tags=["react", "frontend"],
        content="""Create a React component using TypeScript and Tailwind CSS.

Component Name: {{component_name}}
Functionality: {{functionality_description}}

Requirements:
- Use functional components with hooks.
- Ensure full accessibility (ARIA attributes).
- Use Tailwind CSS for styling.
- Handle loading and error states if applicable.
- Export the component as default.""",
    ),
    Template(
        id="t13",
        name="Unit Test Generator",
        description="Writes comprehensive unit tests for provided code.",
        category="Coding",
        tags=["testing", "qa"],
        content="""You are a QA Automation Expert.

Please write unit tests for the following code:
```
{{source_code}}
```

Testing Framework: {{testing_framework}} (e.g., Jest, Pytest)

Requirements:
- Cover happy paths and edge cases.
- Mock external dependencies where appropriate.
- Aim for high code coverage.
- Provide a brief explanation of the test strategy.""",
    ),
    Template(
        id="t14",
        name="Code Refactoring Expert",
        description="Suggests improvements for existing code.",
        category="Coding",
        tags=["refactoring", "clean-code"],
        content="""Review the following code for potential refactoring improvements:

```
{{legacy_code}}
```

Focus on:
1. Readability and Maintainability.
2. Performance optimization.
3. Security vulnerabilities.
4. Adherence to standard naming conventions.

Output the refactored code and a list of changes made.""",
    ),

    # Creative & writing
    Template(
        id="t3",
        name="Creative Storyteller",
        description="A template for generating engaging narratives.",
        category="Creative",
        tags=["writing", "fiction"],
        content="""Write a compelling story based on the following premise:
{{story_premise}}

Style Guide:
- Tone: {{tone}} (e.g., dark, whimsical, suspenseful)
- Focus on sensory details (show, don't just tell).
- Develop strong character motivations.
- Ensure a clear narrative arc with a satisfying conclusion.""",
    ),
    Template(
        id="t8",
        name="Marketing Email Copywriter",
        description="Generates persuasive email copy.",
        category="Creative",
        tags=["marketing", "writing"],
        content="""Act as a top-tier Copywriter.

Goal: Write a {{email_type}} email (e.g., cold outreach, newsletter, product launch).

Product/Service: {{product_name}}
Target Audience: {{target_audience}}
Key Value Proposition: {{value_prop}}

Structure:
- Subject Line: Catchy and high open-rate potential (provide 3 options).
- Hook: Grab attention immediately.
- Body: Persuasive, benefits-focused content.
- CTA: Clear and compelling Call to Action.""",
    ),
    Template(
        id="t15",
        name="Social Media Post Generator",
        description="Creates engaging posts for various platforms.",
        category="Creative",
        tags=["social-media", "marketing"],
        content="""Create social media posts for: {{topic_or_product}}

Platforms:
1. LinkedIn (Professional, thought leadership)
2. Twitter/X (Concise, punchy, hashtags)
3. Instagram (Visual description, engaging caption)

Key Message: {{key_message}}
Call to Action: {{call_to_action}}""",
    ),
    Template(
        id="t16",
        name="SEO Blog Post Writer",
        description="Writes SEO-optimized blog articles.",
        category="Creative",
        tags=["seo", "blogging"],
        content="""Write a comprehensive blog post about: {{blog_topic}}

Target Keyword: {{target_keyword}}
Target Audience: {{audience_persona}}

Requirements:
- SEO-friendly title and subheadings (H1, H2, H3).
- Introduction that hooks the reader.
- Clear, actionable content.
- Conclusion with a summary.
- Meta Description (under 160 characters).""",
    ),

    # Analysis & business
    Template(
        id="t5",
        name="Data Analysis Assistant",
        description="Helps interpret data and find patterns.",
        category="Analysis",
        tags=["data", "business"],
        content="""You are a Data Analysis Expert.

I have the following data context:
{{data_context}}

Please analyze this information to find:
1. Key trends and patterns.
2. Potential anomalies or outliers.
3. Actionable insights for business strategy.
4. Suggestions for further investigation.""",
    ),
    Template(
        id="t10",
        name="Meeting Summarizer",
        description="Condenses meeting notes into actionable items.",
        category="Analysis",
        tags=["business", "productivity"],
        content="""You are an efficient Executive Assistant.

Here are the raw notes from a meeting:
{{meeting_notes}}

Please provide a summary formatted as follows:
1. **Executive Summary**: 2-3 sentences.
2. **Key Discussion Points**: Bullet points.
3. **Action Items**: A table with [Task], [Owner], and [Deadline] (if mentioned).
4. **Next Steps**: Immediate follow-ups required.""",
    ),
    Template(
        id="t12",
        name="JSON Extractor",
        description="Extracts structured JSON data from text.",
        category="Analysis",
        tags=["data", "extraction"],
        content="""You are a strictly compliant data parser.

Input Text:
{{unstructured_text}}

Task: Extract the following information and output it as valid JSON only. Do not add markdown formatting or explanations.

Schema required:
{
  "{{field_1}}": "string",
  "{{field_2}}": "number",
  "keywords": ["array", "of", "strings"]
}""",
    ),
    Template(
        id="t17",
        name="SWOT Analysis",
        description="Performs a Strengths, Weaknesses, Opportunities, Threats analysis.",
        category="Analysis",
        tags=["business", "strategy"],
        content="""Perform a SWOT Analysis for: {{company_or_product}}

Context/Industry: {{industry_context}}

Please detail:
- **Strengths**: Internal positive factors.
- **Weaknesses**: Internal negative factors.
- **Opportunities**: External positive factors.
- **Threats**: External negative factors.

Conclude with 3 strategic recommendations based on the analysis.""",
    ),
]


def builtin_templates() -> List[Template]:
    """Return fresh copies of the seed templates."""
    return [Template.from_dict(t.to_dict()) for t in BUILTIN_TEMPLATES]
