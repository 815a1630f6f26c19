"""Static data: text anchors and the gem catalog the recipe relies on."""
