"""Pipeline stages used by the compiler orchestrator."""
