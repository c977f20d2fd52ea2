"""
Centralized Spanish UI messages.
All user-facing text in Spanish (es-MX) for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Bienvenido {name}',
    'logout_success': 'Sesión cerrada correctamente',
    'register_success': 'Registro completado. ¡Bienvenido {name}!',
    'booking_created': 'Reservación creada exitosamente',
    'booking_saved': 'Reservación guardada con el código {code}',
    'booking_deleted': 'Reservación eliminada',
    'booking_status_updated': 'Estado de la reservación actualizado',
    'preferences_saved': 'Preferencias guardadas correctamente',
    'payment_recorded': 'Pago registrado correctamente',
    'billing_option_selected': 'Opción de facturación registrada: {option}',

    # Error messages
    'generic_error': 'Ocurrió un error. Por favor intenta de nuevo.',
    'invalid_email': 'El formato del correo electrónico no es válido',
    'invalid_credentials': 'Correo electrónico o contraseña incorrectos',
    'not_authenticated': 'Usuario no autenticado',
    'permission_denied': 'No tienes permisos para esta acción',
    'booking_save_error': 'Error al guardar la reservación',
    'booking_delete_error': 'Error al eliminar la reservación',
    'booking_not_found': 'No se encontró la reservación',
    'bookings_load_error': 'Error al cargar las reservaciones',
    'hotels_load_error': 'Error al cargar los hoteles',
    'hotel_not_found': 'No se encontró información del hotel',
    'preferences_save_error': 'Error al guardar las preferencias',
    'profile_load_error': 'Error al cargar el perfil',
    'dashboard_load_error': 'Error al cargar el panel de administración',
    'user_not_found': 'No se encontró un usuario con ese correo electrónico',
    'checkout_error': 'No se pudo iniciar el pago. Por favor intenta de nuevo.',
    'checkout_retrieve_error': 'No se pudo verificar el estado del pago',
    'chat_error': 'Lo siento, ocurrió un error al procesar tu mensaje. Por favor intenta de nuevo.',
    'chat_prompt_limit': 'Has alcanzado el límite de mensajes. Regístrate o inicia sesión para continuar.',
    'pdf_error': 'Error al generar el PDF',
    'invalid_date_range': 'La fecha de salida debe ser posterior a la fecha de entrada',
    'past_check_in': 'La fecha de entrada no puede ser anterior a hoy',
    'invalid_capacity': 'Número de personas no permitido para el tipo de habitación',
    'invalid_status': 'Estado no válido',

    # Info messages
    'no_results': 'Sin resultados',
    'no_booking_details': 'Aún no hay detalles de la reservación',
    'no_booking_details_hint': 'Los detalles se mostrarán aquí conforme avance la conversación',
    'no_hotels_found': 'No se encontraron hoteles con los filtros seleccionados',
    'no_bookings_found': 'No se encontraron reservaciones',
    'confirm_delete': '¿Estás seguro de eliminar esta reservación?',
    'to_be_defined': 'Por definir',
    'not_specified': 'No especificado',

    # Module titles
    'chat': 'Asistente de Reservaciones',
    'hotel_search': 'Buscar Hoteles',
    'manual_reservation': 'Reservación Manual',
    'bookings_report': 'Mis Reservaciones',
    'profile': 'Mi Perfil',
    'admin_dashboard': 'Panel de Administración',

    # Booking states
    'status_pending': 'Pendiente',
    'status_completed': 'Completada',
    'status_cancelled': 'Cancelada',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message


def status_label(status: str) -> str:
    """Spanish label for a booking/payment status; unknown values read as cancelled."""
    if status == 'completed':
        return MESSAGES['status_completed']
    if status == 'pending':
        return MESSAGES['status_pending']
    return MESSAGES['status_cancelled']
