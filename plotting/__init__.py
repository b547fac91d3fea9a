from .vectorizer import scene_to_drawing, scene_to_svg, save_scene_as_svg
from .renderer import draw_scene_on_axis, save_scene_as_png, render_to_file
