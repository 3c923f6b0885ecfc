"""Content app package: contact messages, home-page banners and the
images of the "about us" page."""
