# src/prompts/templates.py — v1
"""Fixed prompt templates, one per assistant feature.

Bodies use ``str.format`` placeholders. Values are inserted verbatim: the
consumer is a language model, so nothing is escaped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

RequestKind = Literal["text", "media", "audio", "structured"]
ModelTier = Literal["vision", "text"]


class TemplateId(str, Enum):
    MEDIA = "media"
    AUDIO = "audio"
    SYMPTOMS = "symptoms"
    FIRST_AID = "first_aid"
    BEHAVIOR = "behavior"
    LOCATION = "location"
    RECIPE = "recipe"
    MEMORIAL = "memorial"
    GROWTH = "growth"
    PLANT = "plant"
    HEALTH = "health"


@dataclass(frozen=True)
class PromptTemplate:
    """A template plus the routing data the gateway needs."""

    id: TemplateId
    namespace: str  # cache key prefix
    kind: RequestKind
    model_tier: ModelTier
    body: str
    required: tuple[str, ...] = ()


MEDIA_BODY = """Analyze this pet {subject} and provide a comprehensive analysis in clear, plain text without any special formatting or markdown characters. Focus on:

1. Emotional State & Mood
   - Facial expressions (relaxed vs. tense)
   - Body posture and positioning
   - Eye contact and blinking patterns
   - Overall emotional indicators
   - Stress or comfort signals{emotion_extra}

2. Physical Health Assessment
   - Visible health issues or concerns
   - Coat and skin condition
   - Weight and body condition
   - Any visible injuries or abnormalities{physical_extra}

3. Environmental Analysis
   - Potential hazards or stressors in the environment
   - Comfort level in current surroundings
   - Interaction with environment{environment_extra}

4. Recommendations
   - Suggestions for improving emotional well-being
   - Health-related recommendations
   - Environmental adjustments if needed{recommendation_extra}

Format the response in clear sections with descriptive headings. Provide specific observations and actionable recommendations. Keep the tone informative but approachable."""

AUDIO_BODY = """As an expert in pet vocalization analysis, provide a detailed breakdown of this pet audio recording. Structure your analysis as follows:

1. Sound Analysis
   - Describe the specific sounds heard (type, pitch, duration, intensity)
   - Note any patterns or changes in the vocalizations
   - Identify distinct vocal elements (e.g., barks, growls, whines)

2. Emotional Assessment
   - Primary emotion(s) indicated by the sounds
   - Secondary emotional indicators
   - Level of arousal or intensity
   - Signs of stress or contentment

3. Behavioral Context
   - Likely triggers for these vocalizations
   - Whether this is normal or concerning behavior
   - What the pet might be trying to communicate

4. Recommendations
   - Specific steps owners can take to address any concerns
   - Environmental modifications if needed
   - When to seek professional help
   - Training or behavioral suggestions

For reference, here's how to interpret common pet vocalizations:

Dogs:
- Short, high-pitched barks: Excitement, playfulness, attention-seeking
- Deep, continuous barking: Warning, territorial behavior, threat detection
- Growling: Warning, discomfort, resource guarding, or play (context-dependent)
- Whining: Stress, anxiety, pain, or seeking attention
- Howling: Communication with others, response to sounds, separation anxiety

Cats:
- Short meows: Greetings, acknowledgment
- Long meows: Demands, complaints
- Purring: Usually contentment (but can indicate stress/pain)
- Growling/hissing: Fear, aggression, defensive behavior
- Chirping/trilling: Excitement, greeting, attention-seeking

Provide a clear, actionable analysis that helps owners understand and respond to their pet's vocalizations."""

SYMPTOMS_BODY = """As a veterinary AI assistant, analyze these pet symptoms and provide a preliminary assessment. The response should be structured as follows:

1. Possible Conditions
   - List potential conditions that match the symptoms
   - Order from most to least likely
   - Include brief explanations for each

2. Severity Assessment
   - Indicate urgency level (Emergency, Urgent, Non-urgent)
   - Explain why this urgency level was chosen
   - List any red flags that require immediate attention

3. Recommendations
   - Immediate care steps owners can take
   - Whether veterinary care is needed and how soon
   - Preventive measures to avoid worsening

4. Important Notes
   - Any crucial warnings or considerations
   - Symptoms to watch for that would indicate worsening
   - When to seek emergency care

Remember this is a preliminary assessment only. Always recommend consulting with a veterinarian for proper diagnosis and treatment.

Analyze these symptoms: {text}"""

FIRST_AID_BODY = """As a veterinary first aid expert, provide clear, step-by-step emergency guidance for the following pet emergency situation. Structure the response as follows:

1. Initial Assessment
   - Immediate danger signs to check
   - Quick vital signs to monitor
   - Signs that indicate severity

2. Emergency Steps
   - Numbered, clear steps to take immediately
   - What to do while waiting for veterinary care
   - What NOT to do (common mistakes)

3. When to Seek Emergency Care
   - Clear indicators for emergency vet visit
   - Signs of worsening condition
   - Maximum wait time before professional care

4. Prevention Tips
   - How to prevent similar situations
   - Warning signs to watch for
   - Preparation recommendations

IMPORTANT: Always emphasize that this is first aid guidance only and does not replace professional veterinary care.

Emergency situation: {text}"""

BEHAVIOR_BODY = """As a professional pet behaviorist, analyze this behavioral issue and provide detailed training guidance. Structure the response as follows:

1. Behavior Analysis
   - Root causes of the behavior
   - Common triggers and patterns
   - Impact on pet's well-being
   - Environmental factors

2. Training Plan
   - Step-by-step training exercises
   - Positive reinforcement techniques
   - Timeline for improvement
   - Required tools or resources

3. Prevention Strategies
   - Environmental modifications
   - Daily routine adjustments
   - Alternative behaviors to encourage
   - Management techniques

4. Progress Tracking
   - Success indicators
   - Milestones to monitor
   - When to adjust the approach
   - Signs of improvement

Remember to emphasize positive reinforcement and force-free training methods. For serious behavioral issues, always recommend consulting with a professional trainer or behaviorist.

Analyze this behavior: {text}"""

LOCATION_BODY = """As a pet-friendly location expert, analyze this area and provide detailed insights for pet owners. Structure the response as follows:

1. Pet-Friendly Overview
   - General assessment of pet-friendliness
   - Notable features for pets
   - Climate considerations for pets
   - Common pet restrictions or regulations

2. Outdoor Activities
   - Best parks and walking trails
   - Pet-friendly beaches or nature areas
   - Exercise opportunities
   - Seasonal considerations

3. Pet Services
   - Veterinary care availability
   - Pet supply stores
   - Grooming services
   - Pet daycare and boarding options

4. Local Tips
   - Pet-friendly restaurants and cafes
   - Indoor activities for bad weather
   - Local pet communities or groups
   - Special events or meetups

Provide practical, actionable information that helps pet owners make the most of the area with their pets.

Analyze this location: {text}"""

RECIPE_BODY = """As a pet nutrition expert, create a healthy homemade pet treat recipe using these ingredients: {ingredients}. Structure the response as follows:

1. Recipe Name and Overview
   - A short, friendly name for the treat
   - Which pets it suits (dogs, cats or both)
   - Preparation and cooking time

2. Ingredients and Safety Check
   - Quantities for each ingredient
   - Flag any listed ingredient that is unsafe for pets and leave it out
   - Optional safe substitutions

3. Instructions
   - Numbered, step-by-step preparation
   - Baking or cooling instructions
   - Storage and shelf life

4. Nutritional Information
   - Approximate calories per treat
   - Key nutrients and benefits
   - Recommended serving size by pet size

Treats should make up no more than 10% of a pet's daily calories. Recommend checking with a veterinarian for pets with allergies or dietary restrictions."""

MEMORIAL_BODY = """Write a heartfelt, gentle memorial tribute for a beloved pet who has passed away.

Pet's name: {name}
Species/Breed: {species}
Years together: {years}
Memories shared by the owner: {description}

The tribute should:
- Celebrate the pet's personality and the special moments described
- Acknowledge the bond between the pet and their family
- Offer comfort without minimizing the loss
- Close with a short, hopeful message of remembrance

Write in warm, plain prose of three to five short paragraphs without headings or markdown."""

GROWTH_BODY = """As a veterinary growth and development specialist, analyze this {species}'s growth data and compare it to breed standards.

Breed: {breed}
Age: {age} months
Weight: {weight} kg{height_line}

Structure the response as follows:

1. Growth Assessment
   - How the current weight{height_clause} compares to breed standards for this age
   - Whether growth appears on track, ahead or behind

2. Expected Development
   - Expected adult size for the breed
   - Growth milestones for the coming months

3. Nutrition and Exercise
   - Feeding recommendations for this growth stage
   - Appropriate exercise for this age

4. Health Watchpoints
   - Breed-specific growth concerns
   - Signs that warrant a veterinary visit

Remember that breed standards are ranges and individual pets vary. Recommend regular veterinary check-ups to monitor growth."""

PLANT_BODY = """Identify the plant in this photo and assess whether it is safe for pets. Structure the response as follows:

1. Plant Identification
   - Common and scientific name
   - Confidence level of the identification

2. Toxicity Assessment
   - Toxicity to dogs
   - Toxicity to cats
   - Toxic parts of the plant and toxic compounds

3. Symptoms of Poisoning
   - Signs to watch for after ingestion
   - How quickly symptoms typically appear

4. Safety Recommendations
   - Whether to keep the plant out of reach or remove it
   - Pet-safe alternatives
   - What to do if a pet has eaten part of the plant

If the plant cannot be identified with confidence, say so and advise treating it as potentially toxic. Always recommend contacting a veterinarian or animal poison control if ingestion is suspected."""

HEALTH_BODY = """As a veterinary AI assistant, review this pet health questionnaire and provide a preventive health assessment.

{answers}

Respond with exactly these four sections, each starting with its heading line, in this order:

### PREDICTION
A short overall health outlook in plain prose.

### RISK FACTORS
One risk factor per line, each line starting with "- ".

### RECOMMENDATIONS
One recommendation per line, each line starting with "- ".

### SEVERITY
A single word: Low, Moderate or High.

Do not add any text outside these sections. This assessment is informational only and does not replace professional veterinary care."""


TEMPLATES: dict[TemplateId, PromptTemplate] = {
    t.id: t
    for t in (
        PromptTemplate(TemplateId.MEDIA, "media", "media", "vision", MEDIA_BODY),
        PromptTemplate(TemplateId.AUDIO, "audio", "audio", "text", AUDIO_BODY),
        PromptTemplate(TemplateId.SYMPTOMS, "symptoms", "text", "text", SYMPTOMS_BODY, ("text",)),
        PromptTemplate(TemplateId.FIRST_AID, "firstaid", "text", "text", FIRST_AID_BODY, ("text",)),
        PromptTemplate(TemplateId.BEHAVIOR, "behavior", "text", "text", BEHAVIOR_BODY, ("text",)),
        PromptTemplate(TemplateId.LOCATION, "location", "text", "text", LOCATION_BODY, ("text",)),
        PromptTemplate(TemplateId.RECIPE, "recipe", "structured", "text", RECIPE_BODY, ("ingredients",)),
        PromptTemplate(
            TemplateId.MEMORIAL, "memorial", "structured", "text", MEMORIAL_BODY,
            ("name", "species", "years", "description"),
        ),
        PromptTemplate(
            TemplateId.GROWTH, "growth", "structured", "text", GROWTH_BODY,
            ("species", "breed", "age", "weight"),
        ),
        PromptTemplate(TemplateId.PLANT, "plant", "media", "vision", PLANT_BODY),
        PromptTemplate(TemplateId.HEALTH, "health", "structured", "text", HEALTH_BODY),
    )
}


def get_template(template_id: TemplateId | str) -> PromptTemplate:
    """Look up a template by id or id string.

    Raises:
        KeyError: If the id is unknown.
    """
    try:
        return TEMPLATES[TemplateId(template_id)]
    except ValueError:
        raise KeyError(f"Unknown prompt template: {template_id!r}") from None
