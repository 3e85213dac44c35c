#!/usr/bin/env python
"""
RDF Explorer
Version: 1.0.0

Launch with `streamlit run rdfexplorer.py`; `python rdfexplorer.py --test` runs the test suite.
"""

import sys
import unittest


def run_tests():
    suite = unittest.defaultTestLoader.discover("tests", top_level_dir=".")
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    if result.wasSuccessful():
        print("All tests passed!")
    else:
        print("Some tests failed.")
    return result.wasSuccessful()


if __name__ == "__main__":
    if "--test" in sys.argv:
        sys.exit(0 if run_tests() else 1)
    else:
        from rdf_explorer.app import main
        main()
