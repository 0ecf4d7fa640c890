"""Shulkers - find Minecraft server plugins across Spigot and Modrinth."""

__version__ = "0.3.0"
