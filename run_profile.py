#!/usr/bin/env python3
"""Read or update an ORCID profile.

This is a thin wrapper around the orcid_profile package for running
``python run_profile.py --orcid ... show`` from a checkout.
"""

from orcid_profile.cli import main

if __name__ == "__main__":
    main()
