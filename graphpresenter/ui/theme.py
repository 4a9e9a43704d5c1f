from PyQt6.QtGui import QColor

ICON_FONT_FAMILY = "Font Awesome 6 Free"

# Style tag -> colour; semantic tags come from the demo store
TAG_COLORS = {
    "info": "#2a82da",
    "success": "#4caf50",
    "warning": "#ff9800",
    "danger": "#f44336",
}


class Theme:
    def __init__(self, name, background, node_fill, node_border, fixed_border, ring, ring_hover, text,
                 link, link_label, action, action_disabled, button_background, button_text):
        self.name = name
        self.background = QColor(background)
        self.node_fill = QColor(node_fill)
        self.node_border = QColor(node_border)
        self.fixed_border = QColor(fixed_border)
        self.ring = QColor(ring)
        self.ring_hover = QColor(ring_hover)
        self.text = QColor(text)
        self.link = QColor(link)
        self.link_label = QColor(link_label)
        self.action = QColor(action)
        self.action_disabled = QColor(action_disabled)
        self.button_background = QColor(button_background)
        self.button_text = QColor(button_text)

    def node_color(self, style_tags):
        # "fill-info" etc. colour the node body; the last known tag wins
        color = self.node_fill
        for tag in style_tags:
            if tag.startswith("fill-") and tag[5:] in TAG_COLORS:
                color = QColor(TAG_COLORS[tag[5:]])
        return color

    def link_color(self, style_tags):
        color = self.link
        for tag in style_tags:
            if tag in TAG_COLORS:
                color = QColor(TAG_COLORS[tag])
        return color


THEMES = {
    "Dark": Theme(
        "Dark",
        background="#121212",
        node_fill="#00bcd4",
        node_border="#0097a7",
        fixed_border="#ffffff",
        ring="#2800bcd4",
        ring_hover="#5000bcd4",
        text="#ffffff",
        link="#555555",
        link_label="#d4d4d4",
        action="#3e3e3e",
        action_disabled="#252526",
        button_background="#2d2d2d",
        button_text="#d4d4d4",
    ),
    "Light": Theme(
        "Light",
        background="#f0f0f0",
        node_fill="#4ca3e0",
        node_border="#2a82da",
        fixed_border="#000000",
        ring="#284ca3e0",
        ring_hover="#504ca3e0",
        text="#000000",
        link="#999999",
        link_label="#333333",
        action="#d0d0d0",
        action_disabled="#e9e7e3",
        button_background="#e0e0e0",
        button_text="#333333",
    ),
}


def get_theme(name):
    return THEMES.get(name, THEMES["Dark"])
