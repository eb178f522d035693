SAMPLE_MODULES = [
    {
        "title": "Introduction to AI",
        "description": "Learn the fundamentals of artificial intelligence",
        "order": 1,
        "lessons": [
            {
                "title": "What is Artificial Intelligence?",
                "order": 1,
                "difficulty": "beginner",
                "xp_reward": 100,
                "content": {
                    "introduction": "A first look at what AI is and what it is not.",
                    "sections": [
                        {
                            "title": "Defining AI",
                            "content": "Artificial intelligence is software that performs tasks which normally need human judgement.",
                            "examples": ["Spam filters", "Voice assistants"],
                        },
                        {
                            "title": "Narrow and general AI",
                            "content": "Today's systems are narrow: they excel at specific tasks but do not reason about everything.",
                        },
                    ],
                    "key_takeaways": [
                        "AI automates judgement-based tasks",
                        "Current AI is narrow",
                    ],
                },
            },
            {
                "title": "How Models Learn",
                "order": 2,
                "difficulty": "beginner",
                "xp_reward": 100,
                "content": {
                    "introduction": "Models learn patterns from examples instead of following hand-written rules.",
                    "sections": [
                        {
                            "title": "Training data",
                            "content": "A model is shown many examples and adjusts itself to reduce its mistakes.",
                        },
                    ],
                    "key_takeaways": [
                        "Data quality shapes model quality",
                        "Models generalize from examples",
                    ],
                },
            },
        ],
        "quiz": {
            "title": "Introduction to AI Quiz",
            "passing_score": 20,
            "xp_reward": 200,
            "questions": [
                {
                    "id": "q1",
                    "question": "Which of these is an everyday use of AI?",
                    "type": "multiple_choice",
                    "options": ["Spam filter", "Light switch", "Paper clip", "Stapler"],
                    "correct_answer": 0,
                    "explanation": "Spam filters learn to recognise unwanted e-mail.",
                    "points": 10,
                },
                {
                    "id": "q2",
                    "question": "Today's AI systems are general-purpose thinkers.",
                    "type": "true_false",
                    "options": ["True", "False"],
                    "correct_answer": "False",
                    "explanation": "Current systems are narrow and task specific.",
                    "points": 10,
                },
                {
                    "id": "q3",
                    "question": "What do models learn from?",
                    "type": "text_input",
                    "correct_answer": "data",
                    "explanation": "Models learn patterns from training data.",
                    "points": 10,
                },
            ],
        },
    },
    {
        "title": "Prompt Engineering",
        "description": "Master the art of crafting effective AI prompts",
        "order": 2,
        "lessons": [
            {
                "title": "Introduction to Prompt Engineering",
                "order": 1,
                "difficulty": "beginner",
                "xp_reward": 100,
                "content": {
                    "introduction": "Learn the basics of prompt engineering",
                    "sections": [
                        {
                            "title": "What is Prompt Engineering?",
                            "content": "Prompt engineering is the art of crafting effective instructions for AI models.",
                        },
                    ],
                    "key_takeaways": [
                        "Understanding AI communication",
                        "Basic prompt structure",
                    ],
                },
            },
            {
                "title": "Giving Context and Examples",
                "order": 2,
                "difficulty": "intermediate",
                "xp_reward": 150,
                "content": {
                    "introduction": "Better prompts give the model the context it cannot guess.",
                    "sections": [
                        {
                            "title": "Few-shot prompting",
                            "content": "Showing a couple of worked examples steers the format and tone of the answer.",
                            "examples": ["Input: cat -> Output: chat", "Input: dog -> Output: chien"],
                        },
                    ],
                    "key_takeaways": [
                        "State the audience and goal",
                        "Examples beat long descriptions",
                    ],
                },
            },
        ],
        "quiz": {
            "title": "Prompt Engineering Quiz",
            "passing_score": 15,
            "xp_reward": 250,
            "questions": [
                {
                    "id": "q1",
                    "question": "Adding worked examples to a prompt is called?",
                    "type": "multiple_choice",
                    "options": ["Few-shot prompting", "Overfitting", "Tokenizing", "Caching"],
                    "correct_answer": 0,
                    "explanation": "Examples in the prompt are 'shots'.",
                    "points": 10,
                },
                {
                    "id": "q2",
                    "question": "Clear context usually improves model answers.",
                    "type": "true_false",
                    "options": ["True", "False"],
                    "correct_answer": "True",
                    "explanation": "Models cannot guess what you did not tell them.",
                    "points": 10,
                },
            ],
        },
    },
]

SAMPLE_USER_EMAIL = "alex@example.com"

SAMPLE_USERS = [
    {
        "name": "Alex Chen",
        "email": SAMPLE_USER_EMAIL,
        "total_score": 2450,
        "current_streak": 7,
        "longest_streak": 15,
    },
    {
        "name": "Sarah Kim",
        "email": "sarah@example.com",
        "total_score": 2380,
        "current_streak": 5,
        "longest_streak": 12,
    },
    {
        "name": "Mike Johnson",
        "email": "mike@example.com",
        "total_score": 2250,
        "current_streak": 3,
        "longest_streak": 8,
    },
]

SAMPLE_PROMPTS = [
    {
        "title": "Creative Story Starter",
        "category": "creative",
        "difficulty": "beginner",
        "tags": ["storytelling", "creativity", "writing"],
        "prompt": {
            "instruction": "Write a creative story beginning based on the given scenario. Focus on setting the scene and introducing an interesting character.",
            "context": "You'll be given a simple scenario. Expand it into an opening that hooks the reader.",
            "examples": [
                {
                    "input": "A person finds a mysterious key in their grandmother's attic",
                    "output": "Sarah's fingers trembled as she lifted the ornate brass key from beneath the dusty photo albums. The metal was warm to the touch.",
                    "explanation": "Sensory detail and a hint of mystery turn a plain premise into a hook.",
                }
            ],
            "tips": [
                "Use sensory details to make the scene vivid",
                "Create immediate intrigue or questions",
                "Establish the character's emotional state",
            ],
            "variations": [
                "Try different genres (mystery, sci-fi, romance)",
                "Experiment with different points of view",
            ],
        },
        "learning_objectives": ["Practice creative writing", "Learn story structure"],
        "estimated_time": 15,
        "xp_reward": 100,
    },
    {
        "title": "Problem-Solution Analysis",
        "category": "analytical",
        "difficulty": "intermediate",
        "tags": ["analysis", "problem-solving", "critical-thinking"],
        "prompt": {
            "instruction": "Analyze a given problem and propose a structured solution. Break the problem into components and give a step-by-step approach.",
            "context": "You'll receive a real-world problem. Identify root causes and propose actionable solutions.",
            "examples": [
                {
                    "input": "A small business is losing customers to online competitors",
                    "output": "Root causes: limited online presence and outdated customer experience. Plan: build a web shop, revisit pricing and start a loyalty program.",
                    "explanation": "Analysis first, then concrete steps.",
                }
            ],
            "tips": [
                "Identify root causes, not just symptoms",
                "Propose specific, actionable solutions",
                "Include success metrics",
            ],
            "variations": None,
        },
        "learning_objectives": ["Develop analytical thinking", "Practice structured communication"],
        "estimated_time": 25,
        "xp_reward": 150,
    },
    {
        "title": "Technical Explanation Simplifier",
        "category": "technical",
        "difficulty": "advanced",
        "tags": ["technical-writing", "communication", "simplification"],
        "prompt": {
            "instruction": "Take a complex technical concept and explain it in simple terms that anyone can understand. Use analogies and examples.",
            "context": "Make the topic accessible to non-technical readers while keeping it accurate.",
            "examples": [
                {
                    "input": "Explain blockchain technology",
                    "output": "Think of blockchain as a ledger book copied to thousands of computers. A new entry is only added once most copies agree it is valid.",
                    "explanation": "A familiar object carries the idea of distributed consensus.",
                }
            ],
            "tips": [
                "Use familiar analogies and metaphors",
                "Avoid technical jargon",
                "Explain the 'why' before the 'how'",
            ],
            "variations": None,
        },
        "learning_objectives": ["Master technical communication", "Practice audience adaptation"],
        "estimated_time": 30,
        "xp_reward": 200,
    },
]
