# main.py
"""
Main entry point for the ctxmenu demo.
"""
from ctxmenu.demo import run

if __name__ == '__main__':
    raise SystemExit(run())
