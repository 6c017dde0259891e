"""
Narrative text for fallback records.

Shown when the model's output could not be decoded. The wording stays
general on purpose: nothing here is derived from the conversation itself.
"""

CHAT_EMOTIONAL_SHIFT = (
    "The conversation opens on a friendly, slightly reserved note, with both people "
    "checking in and keeping things light. As the exchange goes on, replies get longer "
    "and more personal, and the tone relaxes into something more familiar. Small jokes "
    "and shared references start to appear, which usually signals growing comfort. "
    "Toward the end the messages read as easy and warm, with each person picking up "
    "on what the other says and building on it rather than just answering."
)

CHAT_RELATIONSHIP_SUMMARY = (
    "The two participants communicate in a balanced, good-natured way. Each one gets "
    "room to talk, questions are answered rather than ignored, and the back-and-forth "
    "moves between everyday topics and more personal ones without friction. Their "
    "styles differ a little in length and pace, but the differences complement each "
    "other instead of clashing. Overall the exchange suggests a comfortable connection "
    "built on mutual interest, with room to grow as they keep talking."
)

OVERALL_RELATIONSHIP_TRAJECTORY = (
    "Across the uploaded conversations the relationship moves from polite, fairly "
    "short exchanges toward longer and more personal ones. Early messages focus on "
    "logistics and small talk, while later ones include more opinions, plans and "
    "feelings. The shift is gradual rather than sudden, which points to trust being "
    "built over time through consistent contact. Both people keep showing up for the "
    "conversation, and the steady rhythm of their messages suggests the relationship "
    "has settled into a stable and familiar pattern. There are quieter stretches, but "
    "they are followed by renewed engagement rather than distance, and each phase "
    "builds on the comfort established in the one before it."
)

OVERALL_RELATIONSHIP_COMPATIBILITY = (
    "The two participants appear broadly compatible. Their messages show similar "
    "expectations about how often to talk and how quickly to reply, which removes a "
    "common source of friction. One tends to write a little more and the other a "
    "little less, and that difference reads as complementary: one opens topics up, "
    "the other keeps things focused. They handle light and serious subjects with "
    "comparable ease, and neither consistently dominates the exchange. Where they "
    "disagree, the tone stays respectful. Shared humour and a willingness to follow "
    "up on each other's news are good signs for long-term compatibility, although "
    "how they handle bigger decisions together is not yet visible in these chats."
)

OVERALL_FUTURE_PREDICTIONS = (
    "If the current patterns hold, the relationship is likely to keep deepening. "
    "Regular contact and an easy conversational rhythm tend to make it simpler to "
    "raise harder topics when they come up. Over the next year or two the pair may "
    "lean on each other more for advice and support, and shared plans are likely to "
    "become a bigger part of their conversations. Outside pressures such as busy "
    "periods or changes in routine could reduce how often they talk, but the habits "
    "visible here suggest they would reconnect quickly. Making space for more open "
    "conversations about expectations would help the relationship keep growing."
)

OVERALL_COMMUNICATION_ANALYSIS = (
    "Communication between the two is steady and reciprocal. Questions get answers, "
    "news gets a reaction, and both people refer back to earlier messages, which "
    "shows they are paying attention. Humour is used to keep things light without "
    "shutting down serious topics. Messages vary in length depending on the subject, "
    "suggesting each person adapts to the moment rather than sticking to a fixed "
    "style. Disagreements, where they appear, are handled by explaining a point of "
    "view rather than escalating. The overall impression is of two people who are "
    "comfortable talking to each other and who value keeping the conversation going."
)

OVERALL_EMOTIONAL_DYNAMICS = (
    "Emotionally, the conversations feel supportive and low in tension. Both people "
    "acknowledge each other's moods, offer encouragement when something goes wrong "
    "and share in good news. Expressions of care are present but understated, which "
    "fits the generally relaxed tone of the exchanges. Neither participant seems to "
    "hold back out of worry about the other's reaction, a sign of emotional safety. "
    "The emotional range widens over time, from mostly upbeat small talk to moments "
    "of reflection and vulnerability, which suggests the connection is becoming "
    "more personal as it matures."
)

OVERALL_FUTURE_OUTLOOK = (
    "The outlook for this relationship is positive. The foundations visible in the "
    "conversations (regular contact, mutual interest and a respectful tone) are the "
    "kind that hold up well over time. The main opportunity is to talk more directly "
    "about longer-term plans and expectations, which would turn a comfortable "
    "connection into a more intentional one. With continued attention from both "
    "people, the relationship has good prospects for becoming closer and more "
    "resilient in the years ahead."
)

OVERALL_DETAILED_SUMMARY = (
    "Taken together, the conversations describe a healthy and stable relationship. "
    "Both participants contribute to keeping in touch, respond to each other with "
    "interest and move comfortably between everyday topics and more personal ones. "
    "Their communication is balanced: neither person consistently leads or withdraws, "
    "and differences in style complement rather than frustrate each other. The "
    "emotional tone is warm and supportive, with humour used to connect and care "
    "shown through follow-up questions and encouragement. Trust appears well "
    "established, as both share opinions and plans without hesitation. The clearest "
    "areas for growth are more explicit conversations about expectations and a "
    "willingness to address small frustrations directly before they build up. "
    "Overall the relationship shows the hallmarks of a lasting connection: "
    "consistency, respect and genuine interest in each other's lives."
)

OVERALL_COMPATIBILITY_FACTORS = (
    "Several factors support this pairing. They agree, implicitly, on how often to "
    "talk and how quickly to reply. Their styles balance each other, with one more "
    "expansive and the other more concise. They share a sense of humour that eases "
    "difficult moments. Both respond to the other's needs, whether that means "
    "offering support, celebrating good news or simply keeping each other company "
    "through everyday updates. These overlapping habits, combined with enough "
    "difference to keep conversations interesting, make for a relationship that is "
    "both comfortable and engaging."
)

OVERALL_KEY_STRENGTHS = [
    "Consistent, reciprocal communication",
    "Supportive responses to each other's news and moods",
    "Shared humour that keeps the tone light",
    "Respectful handling of differences of opinion",
]

OVERALL_AREAS_FOR_IMPROVEMENT = [
    "Talk more openly about longer-term expectations",
    "Raise small frustrations directly before they build up",
    "Make room for deeper conversations alongside everyday updates",
]

INDIVIDUAL_PROFILES = (
    {
        "communication_style": (
            "Writes longer, well-organised messages and often opens new topics. Asks "
            "follow-up questions and refers back to earlier conversations."
        ),
        "personality_traits": ["thoughtful", "curious", "supportive", "organised"],
        "emotional_patterns": (
            "Shares feelings after some reflection and tends to frame them carefully. "
            "Offers reassurance readily when the other person is stressed."
        ),
        "strengths": ["attentive listener", "clear communicator", "encouraging", "reliable"],
        "detailed_profile": (
            "This participant comes across as considered and engaged. Their messages "
            "show they take time to think about what the other person has said and "
            "respond with substance rather than a quick acknowledgement. They keep "
            "conversations moving by asking questions and bringing up new subjects, "
            "and they remember details from earlier exchanges. Emotionally they are "
            "steady and supportive, more likely to reassure than to react sharply. "
            "They value meaningful conversation and consistency, and put visible effort "
            "into maintaining the connection."
        ),
    },
    {
        "communication_style": (
            "Replies are shorter and more direct, often warm and informal. Reacts "
            "quickly and keeps the tone relaxed."
        ),
        "personality_traits": ["warm", "direct", "easy-going", "loyal"],
        "emotional_patterns": (
            "Expresses emotions openly and in the moment. Uses humour to lighten heavy "
            "topics and responds warmly to good news."
        ),
        "strengths": ["authentic", "responsive", "good humour", "dependable"],
        "detailed_profile": (
            "This participant brings warmth and spontaneity to the conversations. "
            "Their messages are brief but frequent, and they respond quickly, which "
            "signals that they enjoy the exchange. They say what they mean without "
            "much hedging and react openly to what the other person shares. Humour "
            "plays a big part in how they connect, and they use it to keep things "
            "comfortable. They are a dependable presence in the conversation, showing "
            "up consistently and making the other person feel heard."
        ),
    },
)
