"""
Client programs that populate a chain from a concrete domain.

Each adapter supplies a :class:`~chainwalk.capabilities.Capabilities` subclass
for its payload type, a function that fills a chain, and a printer that
generates walks and writes them to a stream.
"""
