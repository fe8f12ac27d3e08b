"""Black-box conformance harness for the session orchestrator."""
