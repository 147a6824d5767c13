"""Interactive screens, their form fields and the messages passed between them."""