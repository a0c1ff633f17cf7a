"""
chainwalk - a generic weighted Markov chain and random-walk generator.

A chain is a weighted directed graph over arbitrary payload values. States
are deduplicated by a caller-supplied comparison, transitions are counted as
they are observed, and walks sample each next state in proportion to those
counts until a terminal state or a length cap ends them.

The engine knows nothing about its payloads. Everything it needs comes from a
``Capabilities`` object given to the chain at creation: copy, compare,
is-terminal and print.

Minimal example:

    ```python
    import random
    import chainwalk

    caps = chainwalk.FunctionCapabilities(is_terminal=lambda word: word.endswith("."))
    chain = chainwalk.MarkovChain(caps, rng=random.Random(7))
    chain.add_sequence("the cat sat on the mat.".split())

    print(list(chain.generate(start="the", max_length=10)))
    ```

Two client programs ship with the package and run through
``python -m chainwalk``: a snakes and ladders route generator and a tweet
generator trained on a text corpus.

Package-level exports: ``MarkovChain``, ``Capabilities``,
``FunctionCapabilities``, ``AllocationFailure``, ``DeadEndState``.
"""

import chainwalk.capabilities
import chainwalk.exceptions
import chainwalk.markov_chain


MarkovChain = chainwalk.markov_chain.MarkovChain
Capabilities = chainwalk.capabilities.Capabilities
FunctionCapabilities = chainwalk.capabilities.FunctionCapabilities
AllocationFailure = chainwalk.exceptions.AllocationFailure
DeadEndState = chainwalk.exceptions.DeadEndState
