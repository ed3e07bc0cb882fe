"""Entry point wrapper for ``python -m euclid_generator``.

Execution is forwarded to :func:`euclid_generator.main` so the behaviour is
identical whether the user runs ``python -m euclid_generator`` or the
installed ``euclid-generator`` console script.

Example
-------
The following invocation renders the Cuban tresillo setting to a WAV file::

    python -m euclid_generator generate --steps 8 --pulses 3 --output tresillo.wav
"""

from . import main

if __name__ == "__main__":
    main()
