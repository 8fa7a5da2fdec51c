class Translator:
    def __init__(self) -> None:
        self.language = "en"
        self.translations = {
            "en": {},
            "es": {
                # progression
                "No data from the last session": "No hay datos de la última sesión",
                "No weight records": "No hay registros de peso",
                "All sets completed with {reps} reps!": "¡Todas las series completadas con {reps} reps!",
                "{done}/{total} sets at the top of the range. Micro-progression suggested.": "{done}/{total} series al máximo. Micro-progresión sugerida.",
                "Keep {weight}kg until all sets are completed": "Mantén {weight}kg hasta completar todas las series",
                "{done}/{total} sets completed. Almost there!": "{done}/{total} series completadas. ¡Casi lo tienes!",
                "No previous history": "Sin historial previo",
                "Add {increment}kg! {sessions} perfect sessions": "¡Sube {increment}kg! {sessions} sesiones perfectas",
                "Keep {weight}kg until you own the weight": "Mantén {weight}kg hasta dominar el peso",
                "{sessions}/2 sessions before adding weight": "{sessions}/2 sesiones para subir",
                "Suggested weight based on history": "Peso sugerido basado en historial",
                # plateau
                "You need more data to analyze your progress": "Necesitas más datos para analizar tu progreso",
                "Keep training and logging your sets": "Continúa entrenando y registrando tus series",
                "Great progress on {name}! Keep it up.": "¡Excelente progreso en {name}! Mantén el ritmo.",
                "{name} shows signs of stalling. Act now.": "{name} muestra señales de estancamiento. Actúa ahora.",
                "You are on a plateau in {name}. Changes needed.": "Estás en plateau en {name}. Cambios necesarios.",
                "{name} is going backwards. Prioritize recovery.": "{name} está retrocediendo. Prioriza recuperación.",
                "Focus on improving: {names}": "Enfócate en mejorar: {names}",
                "Continue with your current plan and monitor your progress": "Continúa con tu plan actual y monitorea tu progreso",
                # alerts
                "Training below target": "Entrenos por debajo del objetivo",
                "Only {done}/{planned} sessions this week. Shall we adjust the plan?": "Solo {done}/{planned} sesiones esta semana. ¿Ajustamos el plan?",
                "Perfect week! 🎯": "¡Semana perfecta! 🎯",
                "You completed {done}/{planned} workouts. Keep it up!": "Completaste {done}/{planned} entrenamientos. ¡Sigue así!",
                "Possible stagnation detected": "Posible estancamiento detectado",
                "{names} - consider changing variations or adjusting volume": "{names} - considera cambiar variantes o ajustar volumen",
                "💪 Ready to add weight!": "💪 ¡Listo para subir peso!",
                "{names} - time to increase the load": "{names} - el sistema sugiere aumentar carga",
                "Protein below target": "Proteína por debajo del objetivo",
                "{eaten}g / {target}g - add a protein-rich meal": "{eaten}g / {target}g - añade una comida rica en proteína",
                "💧 Low hydration": "💧 Hidratación baja",
                "{liters}L left to reach your goal. Drink water!": "Te faltan {liters}L para tu objetivo. ¡Bebe agua!",
                "Weight up {kg}kg": "Peso subido {kg}kg",
                "Weight down {kg}kg": "Peso bajado {kg}kg",
                "Great progress! Your macros have been adjusted automatically.": "¡Buen progreso! Tus macros se han ajustado automáticamente.",
                "Macros recalculated for your new weight.": "Macros recalculados según tu nuevo peso.",
                "Signs of fatigue detected": "Señales de fatiga detectadas",
                "Your last workouts have been tough. Consider an extra rest day.": "Los últimos entrenos han sido duros. Considera un día de descanso extra.",
                "Adjust plan": "Ajustar plan",
                "See suggestions": "Ver sugerencias",
                "Log": "Registrar",
                "Exercise": "Ejercicio",
                # hydration reminder
                "💧 Start the day with a glass of water to wake up your metabolism": "💧 Empieza el día con un vaso de agua para activar el metabolismo",
                "💪 Hydrate well before training to perform at your best": "💪 Hidrátate bien antes del entreno para rendir al máximo",
                "⚠️ You are {behind}% behind the ideal water intake for this time": "⚠️ Llevas {behind}% menos agua de lo ideal para esta hora",
                "💧 A couple more glasses would get you back on track": "💧 Un par de vasos más te pondrían al día",
                "💧 Have you had water recently?": "💧 ¿Ya tomaste agua recientemente?",
                "🌙 {liters}L left before bed - start finishing up": "🌙 Te quedan {liters}L antes de dormir - ve terminando",
                # habits
                "Train": "Entrenar",
                "Protein goal met": "Proteína cumplida",
                "Hydration": "Hidratación",
                "Drink {liters}L of water": "Beber {liters}L de agua",
                "Sleep 7-8 hours": "Dormir 7-8 horas",
                "Daily sunscreen": "Protector solar diario",
                "Walk 10,000 steps": "Caminar 10.000 pasos",
                # training
                "Less than 5 hours of sleep. Your body needs to recover.": "Menos de 5 horas de sueño. Tu cuerpo necesita recuperarse.",
                "You are at your best! Go all out.": "¡Estás al máximo! Dale con todo.",
                "Good shape. Normal session.": "Buen estado. Sesión normal.",
                "Scheduled rest day. Recover for tomorrow.": "Día de descanso programado. Recupera para mañana.",
                "Complete your workout": "Completa tu entreno",
                "Eat {g}g of protein": "Come {g}g de proteína",
                "Recovery day": "Día de recuperación",
                # nutrition
                "Breakfast": "Desayuno",
                "Lunch": "Almuerzo",
                "Pre-workout": "Pre-entreno",
                "Post-workout": "Post-entreno",
                "Snack": "Merienda",
                "Dinner": "Cena",
                # routines
                "Monday": "Lunes",
                "Tuesday": "Martes",
                "Wednesday": "Miércoles",
                "Thursday": "Jueves",
                "Friday": "Viernes",
                "Saturday": "Sábado",
                "Sunday": "Domingo",
                "Legs": "Piernas",
                "Legs 2": "Piernas 2",
                "Chest": "Pecho",
                "Back": "Espalda",
                "Shoulders": "Hombros",
                "Arms": "Brazos",
                "Chest/Back": "Pecho/Espalda",
                "Chest/Back 2": "Pecho/Espalda 2",
                "Shoulders/Arms": "Hombros/Brazos",
                "Shoulders/Arms 2": "Hombros/Brazos 2",
                "Back/Shoulders": "Espalda/Hombros",
                "Legs Hypertrophy": "Piernas Hiper",
                "Chest/Arms": "Pecho/Brazos",
                "Hypertrophy": "Hipertrofia",
                "Fat Loss": "Definición",
                "Recomposition": "Recomposición",
                "Maintenance": "Mantenimiento",
                "Upper/Lower": "Torso/Pierna",
                "Hybrid": "Híbrida",
                "Advanced": "Avanzado",
                "{emoji} {goal} + Active Athlete": "{emoji} {goal} + Atleta Activo",
                "{split} designed for {goal}.": "{split} diseñada para {goal}.",
                "Adjusted to your build ({weight}kg).": "Ajustada a tu composición ({weight}kg).",
                "Days: {days}.": "Días: {days}.",
                "⚡ Reduced volume after {day}'s activity": "⚡ Volumen reducido por actividad del {day}",
                "📅 Adapted to your outside sports": "📅 Adaptada a tus deportes externos",
                "⚠️ {muscle} worked {times}x/week in outside activities - reduce gym volume": "⚠️ {muscle} trabajado {times}x/semana en actividades externas - reducir volumen en gym",
                "🫀 High weekly cardio volume - add 200-300 kcal": "🫀 Alto volumen cardio semanal - aumenta calorías 200-300kcal",
                "💪 Focus on intensity over total volume": "💪 Enfoque en intensidad sobre volumen total",
                "⏱️ Longer rests to optimize performance": "⏱️ Descansos más largos para optimizar rendimiento",
                "🕐 Extended warm-up recommended (10-15 min)": "🕐 Calentamiento extendido recomendado (10-15 min)",
                "🎯 Emphasis on glutes and hamstrings for muscle balance": "🎯 Énfasis en glúteos e isquios para balance muscular",
            },
        }

    def set_language(self, lang: str) -> None:
        self.language = lang

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

translator = Translator()
