"""chorething-tray: Desktop and console front end for chorething."""
