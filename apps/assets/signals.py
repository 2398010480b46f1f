from django.dispatch import Signal

render_asset_tag = Signal()  # payload: tag, is_build (le receiver peut muter tag.attributes)
