"""Default ACT vocabulary list used when a caller does not supply its own."""

ACT_VOCAB = [
    "Ambivalent", "Indifferent", "Nonchalant", "Apathetic", "Pragmatic", "Cynical",
    "Skepticism", "Optimism", "Nostalgic", "Sentimental", "Didactic", "Pedantic", "Preachy",
    "Moralistic", "Objective", "Impartial", "Unbiased", "Subjective", "Biased", "Partisan",
    "Reverent", "Deferential", "Solemn", "Grave", "Somber", "Frivolous", "Whimsical",
    "Capricious", "Fickle", "Mercurial", "Belligerent", "Hostile", "Antagonistic",
    "Contentious", "Pugnacious", "Conciliatory", "Placating", "Pacifying", "Benevolent",
    "Magnanimous", "Altruistic", "Malevolent", "Vindictive", "Spiteful", "Scornful",
    "Contemptuous", "Disdainful", "Derisive", "Mocking", "Satirical", "Sardonic", "Ironic",
    "Facetious", "Flippant", "Earnest", "Sincere", "Candid", "Frank", "Evasive", "Elusive",
    "Corroborate", "Substantiate", "Validate", "Verify", "Authenticate", "Undermine", "Debunk",
    "Refute", "Discredit", "Invalidate", "Hypothesis", "Conjecture", "Speculation", "Premise",
    "Assumption", "Postulate", "Paradox", "Contradiction", "Dichotomy", "Juxtaposition",
    "Analogy", "Metaphor", "Simile", "Allegory", "Anecdote", "Empirical", "Theoretical",
    "Hypothetical", "Abstract", "Concrete", "Tangible", "Intangible", "Explicit", "Implicit",
    "Tacit", "Latent", "Manifest", "Overt", "Covert", "Clandestine", "Plausible", "Feasible",
    "Viable", "Tenable", "Implausible", "Dubious", "Questionable", "Fallacious", "Erroneous",
    "Spurious", "Synthesis", "Integration", "Amalgamation", "Cohesion", "Disparity",
    "Discrepancy", "Divergence", "Anomaly", "Outlier", "Deviation", "Exacerbate", "Aggravate",
    "Compound", "Ameliorate", "Mitigate", "Alleviate", "Assuage", "Palliate", "Facilitate",
    "Expedite", "Impede", "Hinder", "Hamper", "Obstruct", "Stymie", "Thwart", "Curtail",
    "Inhibit", "Suppress", "Repress", "Proliferate", "Propagate", "Burgeon", "Escalate",
    "Diminish", "Dwindle", "Wane", "Recede", "Subside", "Abate", "Fluctuate", "Oscillate",
    "Vacillate", "Waver", "Persist", "Persevere", "Endure", "Sustain", "Maintain", "Retain",
    "Relinquish", "Renounce", "Abdicate", "Cede", "Yield", "Succumb", "Capitulate",
    "Acquiesce", "Comply", "Conform", "Dissent", "Demur", "Object", "Protest", "Advocate",
    "Champion", "Endorse", "Promote", "Foster", "Cultivate", "Aesthetic", "Artistic", "Ornate",
    "Florid", "Austere", "Spartan", "Plain", "Adorned", "Embellished", "Ostentatious",
    "Pretentious", "Grandiloquent", "Bombastic", "Verbose", "Loquacious", "Garrulous",
    "Taciturn", "Laconic", "Succinct", "Terse", "Pithy", "Brevity", "Prolix", "Rambling",
    "Digressive", "Tangential", "Relevant", "Pertinent", "Germane", "Applicable", "Extraneous",
    "Superfluous", "Redundant", "Obsolete", "Archaic", "Antiquated", "Novel", "Innovative",
    "Unprecedented", "Groundbreaking", "Conventional", "Traditional", "Orthodox",
    "Iconoclastic", "Radical", "Revolutionary", "Conservative", "Liberal", "Progressive",
    "Reactionary", "Ephemeral", "Transitory", "Fleeting", "Evanescent", "Perennial",
    "Enduring", "Lasting", "Eternal", "Immutable", "Static", "Trap", "Envy", "Jealousy",
    "Anxious", "Eager", "Continuous", "Continual", "Affect", "Effect", "Discrete", "Discreet",
    "Elicit", "Illicit", "Imminent", "Eminent", "Perspective", "Prospective", "Precede",
    "Proceed", "Principal", "Principle", "Stationary", "Stationery", "Complement",
    "Compliment", "Allusion", "Illusion", "Delusion", "Cite", "Site", "Sight", "Conscious",
    "Conscience", "Ingenious", "Ingenuous", "Disinterested", "Uninterested", "Eminent",
    "Imminent", "Adapt", "Adopt", "Abate", "Aberration", "Abjure", "Abrogate", "Abscond",
    "Abstruse", "Accretion", "Adumbrate", "Aggrandize", "Alacrity", "Anathema", "Antediluvian",
    "Apocryphal", "Approbation", "Arrogate", "Ascetic", "Aspersion", "Assiduous", "Blandishment"
]
