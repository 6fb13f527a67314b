"""Settings, logging, timing and projection helpers shared across pagewait."""
