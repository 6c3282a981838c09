from flowbot.domain.models import FlowDefinition, StateDefinition, StoreInput, Transition

# ==============================================================================
# SHARED TRANSITIONS
# ==============================================================================

PURPOSE_CHOICES = (
    Transition(r"(1|learn|discord|bot)", "botLearning"),
    Transition(r"(2|help|coding|code)", "codingHelp"),
    Transition(r"(3|chat|talk)", "casualChat"),
)

FOLLOW_UP = (
    Transition(r"(yes|sure|ok|yeah)", "showExample"),
    Transition(r"(no|nope)", "complete"),
    Transition(r".*", "complete"),
)

TO_COMPLETE = (Transition(r".*", "complete"),)

# ==============================================================================
# STATE DEFINITIONS
# ==============================================================================

greeting = StateDefinition(
    prompt="👋 Hello! I'm your conversational assistant. What's your name?",
    transitions=(Transition(r".*", "askPurpose"),),
    action=StoreInput("name"),
)

ask_purpose = StateDefinition(
    prompt=(
        "Nice to meet you, {name}! What brings you here today?\n"
        "1. Learn about Discord bots\n"
        "2. Get help with coding\n"
        "3. Just chatting"
    ),
    transitions=PURPOSE_CHOICES + (Transition(r".*", "clarifyPurpose"),),
)

clarify_purpose = StateDefinition(
    prompt="I didn't quite understand. Could you tell me which option you'd prefer? (1, 2, or 3)",
    transitions=PURPOSE_CHOICES + (Transition(r".*", "askPurpose"),),
)

bot_learning = StateDefinition(
    prompt=(
        "Great! Discord bots are powerful tools. What aspect interests you most?\n"
        "• Commands and interactions\n"
        "• Event handling\n"
        "• API integration"
    ),
    transitions=(
        Transition(r"(command|interaction)", "commandsInfo"),
        Transition(r"(event|handling)", "eventsInfo"),
        Transition(r"(api|integration)", "apiInfo"),
        Transition(r".*", "complete"),
    ),
)

coding_help = StateDefinition(
    prompt="I'd be happy to help with coding! What language are you working with?",
    transitions=(
        Transition(r"(javascript|js|typescript|ts)", "jsHelp"),
        Transition(r"(python|py)", "pythonHelp"),
        Transition(r"(deno|rust)", "denoRustHelp"),
        Transition(r".*", "generalHelp"),
    ),
)

casual_chat = StateDefinition(
    prompt="That's nice! What would you like to talk about?",
    transitions=TO_COMPLETE,
)

commands_info = StateDefinition(
    prompt=(
        "Commands are the primary way users interact with bots. You can use prefix "
        "commands (!help) or slash commands (/help). Would you like to see an example?"
    ),
    transitions=FOLLOW_UP,
)

events_info = StateDefinition(
    prompt=(
        "Event handling allows your bot to respond to various Discord events like "
        "messages, reactions, and member joins. Interested in learning more?"
    ),
    transitions=FOLLOW_UP,
)

api_info = StateDefinition(
    prompt=(
        "The Discord API provides REST endpoints and WebSocket connections for "
        "real-time communication. Would you like documentation links?"
    ),
    transitions=(
        Transition(r"(yes|sure|ok|yeah)", "provideLinks"),
        Transition(r"(no|nope)", "complete"),
        Transition(r".*", "complete"),
    ),
)

show_example = StateDefinition(
    prompt=(
        "Here's a simple Python example:\n"
        "```python\n"
        "@bot.event\n"
        "async def on_message(message):\n"
        "    if message.content == '!ping':\n"
        "        await message.channel.send('Pong!')\n"
        "```\n"
        "Anything else you'd like to know?"
    ),
    transitions=TO_COMPLETE,
)

provide_links = StateDefinition(
    prompt=(
        "Check out these resources:\n"
        "• discord.py: https://discordpy.readthedocs.io\n"
        "• Discord API Docs: https://discord.com/developers/docs\n"
        "\n"
        "Is there anything specific you need help with?"
    ),
    transitions=TO_COMPLETE,
)

js_help = StateDefinition(
    prompt="JavaScript/TypeScript works great for bots too! Are you using a Discord library already?",
    transitions=TO_COMPLETE,
)

python_help = StateDefinition(
    prompt="Python is great for Discord bots! Are you familiar with discord.py?",
    transitions=TO_COMPLETE,
)

deno_rust_help = StateDefinition(
    prompt="Excellent choice! Deno and Rust are both modern and performant. Which one are you focusing on?",
    transitions=TO_COMPLETE,
)

general_help = StateDefinition(
    prompt="I can help with various programming concepts. What specific challenge are you facing?",
    transitions=TO_COMPLETE,
)

complete = StateDefinition(
    prompt="Thank you for the conversation! Feel free to say 'hi' again anytime you need help. 😊",
)

# ==============================================================================
# FLOW DEFINITION
# ==============================================================================

onboarding_flow = FlowDefinition(
    name="onboarding",
    description="Greets a new user, asks their name and routes them by interest.",
    trigger_keywords=frozenset({"hello", "hi", "start", "help"}),
    initial_state="greeting",
    states={
        "greeting": greeting,
        "askPurpose": ask_purpose,
        "clarifyPurpose": clarify_purpose,
        "botLearning": bot_learning,
        "codingHelp": coding_help,
        "casualChat": casual_chat,
        "commandsInfo": commands_info,
        "eventsInfo": events_info,
        "apiInfo": api_info,
        "showExample": show_example,
        "provideLinks": provide_links,
        "jsHelp": js_help,
        "pythonHelp": python_help,
        "denoRustHelp": deno_rust_help,
        "generalHelp": general_help,
        "complete": complete,
    },
    terminal_states=frozenset({"complete"}),
)

DEFAULT_FLOWS = [onboarding_flow]
